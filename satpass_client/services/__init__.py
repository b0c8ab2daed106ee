"""Application services layer.

Services expose the satpass API to the UI. They should avoid UI concerns.
"""

from satpass_client.services.api_client import SatpassApi

__all__ = ["SatpassApi"]
