#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Direct connection test for the Airtable base used by the site.
Bypasses the API and prints what the record store returns for one table.

Run from the backend directory:
    python check_airtable.py                 # events table
    python check_airtable.py "Site Content"  # any table
    python check_airtable.py Events record   # deep diagnostics (base | table | record)
"""

import asyncio
import json
import sys

from src.config import get_settings
from src.database import RecordStore
from src.services.diagnostics_service import (
    check_table_directly,
    environment_report,
    render_log,
    run_deep_diagnostics,
)


async def main(table: str, level: str = None) -> bool:
    settings = get_settings()
    env = environment_report(settings)

    print("=== DIRECT AIRTABLE TEST ===")
    print(f"- Access token: {'[OK] present' if env.access_token_present else '[--] missing'}")
    print(f"- Legacy API key: {'[OK] present' if env.api_key_present else '[--] missing'}")
    print(f"- Base ID: {env.base_id_masked or '[ERROR] missing'}")
    print(f"- Table: {table}")

    if level:
        result = await run_deep_diagnostics(table=table, level=level, settings=settings)
        for line in render_log(result.log):
            print(line)
        return result.success

    async with RecordStore.from_settings(settings) as store:
        result = await check_table_directly(store, table)

    if not result.success:
        print(f"[ERROR] {result.error}")
        return False

    print(f"[OK] Found {result.record_count} records in '{table}'")
    if result.field_access:
        print(f"First record ID: {result.field_access.record_id}")
        print("First record fields:")
        print(json.dumps(result.field_access.values, indent=2, ensure_ascii=False, default=str))
        print(f"Field names: {', '.join(result.field_names)}")
        print("Event field probes:")
        for name, value in result.field_access.probes.items():
            print(f"  - {name}: {value!r}")
    return True


if __name__ == "__main__":
    table_arg = sys.argv[1] if len(sys.argv) > 1 else get_settings().events_table
    level_arg = sys.argv[2] if len(sys.argv) > 2 else None
    if level_arg and level_arg not in ("base", "table", "record"):
        print(f"[ERROR] Unknown level '{level_arg}', use base, table or record")
        sys.exit(2)
    ok = asyncio.run(main(table_arg, level_arg))
    sys.exit(0 if ok else 1)
