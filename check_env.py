#!/usr/bin/env python3
"""
Check environment variables for notiontasks
"""

import os
from dotenv import load_dotenv

load_dotenv()

print("🔍 Checking notiontasks Environment Variables")
print("=" * 50)

required_vars = {
    'NOTION_TOKEN': os.getenv('NOTION_TOKEN'),
    'MONTHLY_DATA_DATABASE_ID': os.getenv('MONTHLY_DATA_DATABASE_ID')
}

print("Required Settings:")
for var, value in required_vars.items():
    if value:
        masked_value = value[:8] + "*" * (len(value) - 8) if len(value) > 8 else "*" * len(value)
        print(f"  ✅ {var}: {masked_value}")
    else:
        print(f"  ❌ {var}: Not set")

print("\n" + "=" * 50)

optional_vars = {
    'NOTION_API_BASE_URL': os.getenv('NOTION_API_BASE_URL'),
    'NOTION_VERSION': os.getenv('NOTION_VERSION'),
    'NOTION_MAX_RETRIES': os.getenv('NOTION_MAX_RETRIES'),
    'NOTION_STRICT_MATCHING': os.getenv('NOTION_STRICT_MATCHING'),
    'NOTION_REMINDER_HOUR': os.getenv('NOTION_REMINDER_HOUR')
}

print("Optional Settings:")
for var, value in optional_vars.items():
    if value:
        print(f"  ✅ {var}: {value}")
    else:
        print(f"  ➖ {var}: Not set (using default)")

print("\n📋 Recommendations:")
if not required_vars['NOTION_TOKEN']:
    print("  • Create an internal integration at https://www.notion.so/my-integrations")
    print("  • Share the monthly data database with the integration")
    print("  • Add NOTION_TOKEN to your .env file")

if not required_vars['MONTHLY_DATA_DATABASE_ID']:
    print("  • Copy the id of the database holding the month pages from its URL")
    print("  • Add MONTHLY_DATA_DATABASE_ID to your .env file")
