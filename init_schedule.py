"""
Pre-populate the schedule with empty days
Usage: python init_schedule.py [--days N]
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from abra.config import INIT_WINDOW_DAYS
from abra.domain.schedule.service import ScheduleService
from abra.storage import get_store

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def init_schedule(days: int) -> int:
    """Add empty slots for the next `days` days, keeping existing entries"""
    service = ScheduleService(get_store())
    added = service.extend_window(days)
    logger.info(f"✅ Schedule populated: {added} new dates added for the next {days} days")
    return added


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Pre-populate the schedule with empty days")
    parser.add_argument("--days", type=int, default=INIT_WINDOW_DAYS, help="Number of days ahead")
    args = parser.parse_args()

    try:
        init_schedule(args.days)
    except Exception as e:
        logger.error(f"❌ Schedule initialisation failed: {e}")
        sys.exit(1)
