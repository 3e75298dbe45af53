import unittest

from notiontasks.constants import DAY_RELATION_FIELDS, NOTION_API_BASE_URL, NotionConfigError
from notiontasks.settings import NotionSettings, validate_relation_fields

BASE_ENV = {
    "NOTION_TOKEN": "secret_token",
    "MONTHLY_DATA_DATABASE_ID": "monthly-db",
}


class TestNotionSettings(unittest.TestCase):

    def test_from_env_defaults(self):
        settings = NotionSettings.from_env(BASE_ENV)
        self.assertEqual(settings.token, "secret_token")
        self.assertEqual(settings.monthly_database_id, "monthly-db")
        self.assertEqual(settings.base_url, NOTION_API_BASE_URL)
        self.assertEqual(settings.max_retries, 3)
        self.assertFalse(settings.strict_matching)
        self.assertEqual(settings.reminder_hour, 23)
        self.assertEqual(settings.relation_fields, DAY_RELATION_FIELDS)

    def test_from_env_overrides(self):
        env = dict(BASE_ENV, NOTION_MAX_RETRIES="0", NOTION_STRICT_MATCHING="True", NOTION_REMINDER_HOUR="18")
        settings = NotionSettings.from_env(env)
        self.assertEqual(settings.max_retries, 0)
        self.assertTrue(settings.strict_matching)
        self.assertEqual(settings.reminder_hour, 18)

    def test_missing_token(self):
        with self.assertRaisesRegex(NotionConfigError, "NOTION_TOKEN"):
            NotionSettings.from_env({"MONTHLY_DATA_DATABASE_ID": "monthly-db"})

    def test_missing_monthly_database(self):
        with self.assertRaisesRegex(NotionConfigError, "MONTHLY_DATA_DATABASE_ID"):
            NotionSettings.from_env({"NOTION_TOKEN": "secret_token"})

    def test_invalid_numbers(self):
        with self.assertRaises(NotionConfigError):
            NotionSettings.from_env(dict(BASE_ENV, NOTION_MAX_RETRIES="lots"))
        with self.assertRaisesRegex(NotionConfigError, "NOTION_MAX_RETRIES"):
            NotionSettings.from_env(dict(BASE_ENV, NOTION_MAX_RETRIES="-1"))
        with self.assertRaises(NotionConfigError):
            NotionSettings.from_env(dict(BASE_ENV, NOTION_REMINDER_HOUR="24"))


class TestRelationFields(unittest.TestCase):

    def test_defaults_cover_every_weekday(self):
        self.assertEqual(validate_relation_fields(DAY_RELATION_FIELDS)["Sunday"], "Sunday Tasks")

    def test_missing_weekday_is_rejected(self):
        fields = dict(DAY_RELATION_FIELDS)
        del fields["Saturday"]
        fields["Sunday"] = ""
        with self.assertRaisesRegex(NotionConfigError, "Saturday, Sunday"):
            NotionSettings(token="t", monthly_database_id="m", relation_fields=fields)


if __name__ == '__main__':
    unittest.main()
