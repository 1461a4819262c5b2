"""
Seed the configured store from exported JSON files
Usage: python migrate_data.py --source data/
"""
import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from abra.domain.clients.repository import decode_clients
from abra.domain.recurring.repository import decode_rules
from abra.domain.schedule.repository import decode_schedule, encode_schedule
from abra.shared.constants import CLIENTS_KEY, RECURRING_JOBS_KEY, SCHEDULE_KEY
from abra.storage import JSONStore, get_store

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def _load(path: Path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def migrate_data(source_dir: Path, store: JSONStore) -> dict:
    """Copy schedule, clients and recurring jobs files into the store"""
    results = {}

    schedule_path = source_dir / f"{SCHEDULE_KEY}.json"
    if schedule_path.exists():
        # Decoding normalises legacy list-shaped team slots before they are stored
        schedule = decode_schedule(_load(schedule_path))
        store.write(SCHEDULE_KEY, encode_schedule(schedule), "Migrate schedule")
        results["schedule"] = {"migrated": True, "date_count": len(schedule)}
    else:
        results["schedule"] = {"migrated": False, "message": f"No {schedule_path.name} found to migrate"}

    clients_path = source_dir / f"{CLIENTS_KEY}.json"
    if clients_path.exists():
        clients = decode_clients(_load(clients_path))
        store.write(CLIENTS_KEY, [client.to_json() for client in clients], "Migrate clients")
        results["clients"] = {"migrated": True, "client_count": len(clients)}
    else:
        store.write(CLIENTS_KEY, [], "Initialise clients")
        results["clients"] = {"migrated": True, "client_count": 0, "message": "Initialized empty clients array"}

    rules_path = source_dir / f"{RECURRING_JOBS_KEY}.json"
    if rules_path.exists():
        rules = decode_rules(_load(rules_path))
        store.write(RECURRING_JOBS_KEY, [rule.to_json() for rule in rules], "Migrate recurring jobs")
        results["recurring_jobs"] = {"migrated": True, "rule_count": len(rules)}
    else:
        results["recurring_jobs"] = {"migrated": False, "message": f"No {rules_path.name} found to migrate"}

    return results


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the configured store from JSON files")
    parser.add_argument("--source", default="data", help="Directory holding the exported JSON files")
    args = parser.parse_args()

    source = Path(args.source)
    if not source.is_dir():
        logger.error(f"Source directory not found: {source}")
        sys.exit(1)

    try:
        results = migrate_data(source, get_store())
    except Exception as e:
        logger.error(f"❌ Migration failed: {e}")
        sys.exit(1)

    for name, result in results.items():
        logger.info(f"{name}: {result}")
    logger.info("✅ Migration completed successfully!")
