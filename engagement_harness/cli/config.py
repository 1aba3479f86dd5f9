# engagement_harness/cli/config.py
import os
from dotenv import load_dotenv
from pathlib import Path

# cli/config.py sits two levels below the project root
project_root = Path(__file__).parent.parent.parent.resolve()

load_dotenv(dotenv_path=project_root / '.env', override=True)

# Base URL of a running harness HTTP surface
HARNESS_API_BASE_URL = os.getenv("HARNESS_API_BASE_URL", "http://127.0.0.1:8000")
