"""Command line entrypoint to ask for an outfit from a local wardrobe."""

from __future__ import annotations

import argparse
import json

from models.taxonomy import OCCASIONS, SEASONS
from wardrobe_app.app import WardrobeApp


def main() -> None:
    parser = argparse.ArgumentParser(description="Suggest an outfit from a stored wardrobe")
    parser.add_argument("--user", required=True, help="Owner id of the wardrobe to use.")
    parser.add_argument("--occasion", required=True, choices=sorted(OCCASIONS))
    parser.add_argument("--season", required=True, choices=sorted(SEASONS))
    args = parser.parse_args()

    app = WardrobeApp()
    response = app.recommend_outfit(user_id=args.user, occasion=args.occasion, season=args.season)
    print(json.dumps(response, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
