import json
import sys

from sheetfeed.config import Settings
from sheetfeed.feeds import project_homepage, project_items
from sheetfeed.sheets import candidate_urls, fetch_url
from sheetfeed.errors import SheetFetchError
from sheetfeed.tabular import decode

settings = Settings.from_env()
sheet_id = sys.argv[1] if len(sys.argv) > 1 else settings.sheet_id

text = None
for url in candidate_urls(sheet_id, settings.sheet_gid, settings.sheet_name):
    try:
        text = fetch_url(url, timeout=settings.request_timeout)
        print(f"✓ {url}")
        break
    except SheetFetchError as e:
        print(f"✗ {url}: {type(e).__name__}: {e}")

if text is None:
    print("\nNo export URL worked. Is the sheet shared as 'Anyone with the link can view'?")
    sys.exit(1)

table = decode(text)
print(f"\nTotal cols: {len(table.headers)}, Total rows: {len(table.rows)}")
for i, val in enumerate(table.headers):
    print(f"  col {i}: {val}")

print("\n--- First 5 data rows ---")
for ri, row in enumerate(table.rows[:5]):
    chunk = [f"{i}:{row[h]}" for i, h in enumerate(table.headers) if row[h].strip()]
    print(f"  Row {ri}: {chunk}")

print("\n--- items feed ---")
print(json.dumps(project_items(table), indent=2, ensure_ascii=False))
print("\n--- homepage feed ---")
print(json.dumps(project_homepage(table), indent=2, ensure_ascii=False))
