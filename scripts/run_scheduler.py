"""
Command line entry point for the court scheduler.

Reads a JSON file shaped like the /api/schedule request body
({"sport": {...}, "settings": {...}}) and prints the timetable.
"""

import sys
import os
import json
import random
import argparse

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sportsday.api.schemas import ScheduleRequest, TimeSlotSchema
from sportsday.core.exceptions import SchedulingError
from sportsday.core.logging_config import setup_logging
from sportsday.models import SlotType
from sportsday.services.court_scheduler import generate_schedule
from sportsday.services.validator import ScheduleValidator


def main():
    """
    Generate, validate and print the timetable for one sport.
    """
    parser = argparse.ArgumentParser(
        description='Sports Day - generate a court timetable for one sport'
    )
    parser.add_argument('input', help='JSON file with "sport" and "settings"')
    parser.add_argument('--no-shuffle', action='store_true', help='Keep the existing match order')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible draw')
    parser.add_argument('--json', action='store_true', help='Print the time slots as JSON')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args()
    setup_logging("DEBUG" if args.verbose else "WARNING")

    with open(args.input, encoding="utf-8") as f:
        request = ScheduleRequest.model_validate(json.load(f))

    sport = request.sport.to_model()
    settings = request.settings.to_model()
    rng = random.Random(args.seed) if args.seed is not None else None

    try:
        slots = generate_schedule(sport, settings, shuffle=not args.no_shuffle, rng=rng)
    except SchedulingError as e:
        print(f"ERROR ({e.kind}): {e.message}")
        return 1

    if args.json:
        payload = [TimeSlotSchema.from_model(slot).model_dump(mode="json", by_alias=True) for slot in slots]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    print("=" * 60)
    print(f"TIMETABLE: {sport.name}")
    print("=" * 60)
    for slot in slots:
        court = settings.court_name(slot.court_id) if slot.court_id else ""
        print(f"{slot.start_time}-{slot.end_time}  {court:<10} {slot.title or slot.type.value}")

    result = ScheduleValidator().validate_schedule(slots, sport.matches, settings, sport.teams)
    print("=" * 60)
    print(f"Matches scheduled: {sum(1 for slot in slots if slot.type == SlotType.MATCH)}")
    print(result.get_summary())
    return 0


if __name__ == '__main__':
    sys.exit(main())
