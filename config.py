"""
config.py -- Single source of truth for selectors, HTTP settings and API sources.

Secrets are never stored here: API keys are read from the environment
variables named below, or passed explicitly by the caller.
"""

from dataclasses import dataclass

# Results page selectors (override per call or via a JSON selectors file)
DEFAULT_RESULT_SELECTORS = {
    "row":                ".results-table tr",
    "horse_name":         ".horse-name",
    "jockey_name":        ".jockey-name",
    "trainer_name":       ".trainer-name",
    "finishing_position": ".finishing-position",
}

REQUEST_TIMEOUT = 20  # seconds

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36 "
    "RaceResults/0.1"
)


@dataclass(frozen=True)
class ApiSource:
    name: str
    base_url: str
    key_env: str  # environment variable holding the API key


RACING_API = ApiSource(
    name="The Racing API",
    base_url="https://api.theracingapi.com",
    key_env="RACING_API_KEY",
)

LSPORTS = ApiSource(
    name="LSports",
    base_url="https://api.lsports.eu",
    key_env="LSPORTS_API_KEY",
)
