"""Development entry point for the EcoFlood API service.

Equivalent to ``ecoflood serve``; kept so the app can be started straight
from a repository checkout.
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

import uvicorn  # noqa: E402
from ecoflood.app import create_app  # noqa: E402

app = create_app()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="EcoFlood API service")
    parser.add_argument("--static-data", action="store_true",
                        help="Serve mock data only; skip Open-Meteo calls")
    parser.add_argument("--port", type=int, default=8008)

    args = parser.parse_args()

    if args.static_data:
        from ecoflood.config import settings
        settings.USE_LIVE_DATA = False

    uvicorn.run(app, host="0.0.0.0", port=args.port)
