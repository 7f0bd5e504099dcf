import json
import logging
import os
import sys

# Ensure src is in python path
sys.path.append(os.path.join(os.path.dirname(__file__), "src"))

from src.config.settings import settings
from src.diplomacy.domain.country import CountryDirectory
from src.diplomacy.domain.diplomacy_snapshot import DiplomacySnapshot
from src.diplomacy.domain.diplomatic_edge import edges_from_payload
from src.diplomacy.services.diplomacy_view_service import build_view_service


SAMPLE_ROWS = [
    {"kind": "Alliance", "first": {"tag": "FRA", "name": "France"}, "second": {"tag": "SCO", "name": "Scotland"},
     "data": {"start_date": "1444.11.11"}},
    {"kind": "Dependency", "first": {"tag": "FRA", "name": "France"}, "second": {"tag": "PRO", "name": "Provence"},
     "data": {"subject_type": "vassal", "start_date": "1444.11.11"}},
    {"kind": "Dependency", "first": {"tag": "FRA", "name": "France"}, "second": {"tag": "QUE", "name": "Quebec"},
     "data": {"subject_type": "crown_colony", "start_date": "1612.3.1"}},
    {"kind": "Subsidy", "first": {"tag": "FRA", "name": "France"}, "second": {"tag": "SCO", "name": "Scotland"},
     "data": {"amount": 4.5, "total": 54, "start_date": "1450.1.1"}},
    {"kind": "Warning", "first": {"tag": "HAB", "name": "Austria"}, "second": {"tag": "FRA", "name": "France"}},
]

SAMPLE_NAMES = {"FRA": "France", "SCO": "Scotland", "PRO": "Provence", "HAB": "Austria"}


def main():
    logging.basicConfig(level=logging.INFO)
    print("Initializing DEV environment...")

    snapshot = DiplomacySnapshot.build(
        edges_from_payload(SAMPLE_ROWS),
        CountryDirectory.from_names(SAMPLE_NAMES),
    )
    service = build_view_service(settings)

    for tag in ("FRA", "SCO", "QUE"):
        views = service.view_for(snapshot, tag)
        print(f"--- {tag} ---")
        print(json.dumps([v.to_payload() for v in views], indent=2))


if __name__ == "__main__":
    main()
