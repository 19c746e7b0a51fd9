# fastfind/paths.py

import os

# --- Base data paths ---
DATA_DIR = os.getenv("FASTFIND_DATA_DIR", "data")

# --- Source corpus files (one record per line) ---
CORPUS_PATH = os.getenv("FASTFIND_CORPUS", os.path.join(DATA_DIR, "corpus.txt"))
SAMPLE_CORPUS_PATH = os.path.join(DATA_DIR, "sample.txt")

# --- Web frontend ---
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5001

# --- Cap on rows returned over HTTP (the engine itself never truncates) ---
MAX_RESULTS = int(os.getenv("FASTFIND_MAX_RESULTS", "1000"))
