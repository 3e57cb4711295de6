import os
from dotenv import load_dotenv
load_dotenv()

# Ubicación de los resultados publicados; RESULTS_DIR tiene prioridad si se define.
RESULTS_BASE_URL = os.getenv("RESULTS_BASE_URL", "https://pasinduravimal.github.io/GPACalculator/files/")
RESULTS_DIR = os.getenv("RESULTS_DIR", "")
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "30"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
