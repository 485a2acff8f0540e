import json
import os

from core.config import DB_PATH
from core.storage import SqlStorage

print('DB:', DB_PATH, 'exists:', os.path.exists(DB_PATH))
if not os.path.exists(DB_PATH):
    raise SystemExit(0)

storage = SqlStorage()
for key in storage.keys():
    raw = storage.get_item(key) or ""
    try:
        data = json.loads(raw)
        size = len(data) if isinstance(data, list) else 1
        print(f'{key}: {size} record(s), {len(raw)} chars')
    except ValueError:
        print(f'{key}: MALFORMED ({len(raw)} chars)')
