import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
CACHE_DIR = Path(os.getenv("ERACAL_CACHE_DIR", PROJECT_ROOT / "cache"))
OUTPUT_DIR = Path(os.getenv("ERACAL_OUTPUT_DIR", PROJECT_ROOT / "output"))
SITES_DIR = Path(os.getenv("ERACAL_SITES_DIR", OUTPUT_DIR / "sites"))

# Static tables
ERA_LIST_FILE = DATA_DIR / "gengous.json"
READINGS_FILE = DATA_DIR / "era_readings.yaml"
SPECIAL_DATES_FILE = DATA_DIR / "special_era_dates.yaml"
ERA_TABLE_FILE = OUTPUT_DIR / "era-info.json"

# Wikipedia
WIKIPEDIA_BASE_URL = "https://ja.wikipedia.org"
ERA_LIST_PATH = "/wiki/%E5%A4%A7%E5%8C%96"  # 大化

# User Agent
USER_AGENT = "eracal/0.1.0 (Japanese era date conversion tool)"
REQUEST_DELAY_SEC = 0.5
