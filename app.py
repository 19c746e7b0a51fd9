#!/usr/bin/env python3
"""
Flask web application for the fast-find search frontend.
"""

import argparse
import os
import time
from flask import Flask, request, jsonify
from fastfind.criteria import Criteria
from fastfind.parser import Parser
from fastfind.searcher import Searcher
from fastfind.paths import CORPUS_PATH, DATA_DIR, DEFAULT_HOST, DEFAULT_PORT, MAX_RESULTS
from profkit import report

app = Flask(__name__)

# Global searcher instance (one engine per process; reload swaps its index)
searcher = Searcher(verbose=True)


def initialize_searcher(path: str = CORPUS_PATH):
    """Load the corpus file and build the indexes."""
    print(f"[App] Initializing search engine from {path} ...")
    lines = Parser().load_lines(path)
    searcher.load(lines)
    print("[App] Search engine initialized successfully")


def resolve_corpus_path(path: str) -> str:
    """
    Resolve a client-supplied corpus path against DATA_DIR.
    Anything that lands outside DATA_DIR (absolute paths, "..", symlinks)
    raises ValueError.
    """
    root = os.path.realpath(DATA_DIR)
    full = os.path.realpath(os.path.join(root, path))
    if os.path.commonpath([root, full]) != root:
        raise ValueError(f'Corpus path must be inside the data directory: {path}')
    return full


def _criteria_from_request() -> Criteria:
    if request.method == 'POST':
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValueError('Request body must be a JSON object')
        return Criteria.from_mapping(data)
    return Criteria.from_mapping(request.args)


@app.route('/search', methods=['GET', 'POST'])
def search():
    """Handle search requests: any of surname / province / year."""
    if not searcher.loaded:
        return jsonify({'error': 'Search engine not initialized'}), 503

    try:
        criteria = _criteria_from_request()
    except (ValueError, TypeError) as e:
        return jsonify({'error': str(e)}), 400

    try:
        # Perform search with timing
        start_time = time.perf_counter()
        results = searcher.search(criteria)
        end_time = time.perf_counter()

        search_time = (end_time - start_time) * 1000  # Convert to milliseconds

        return jsonify({
            'results': results[:MAX_RESULTS],
            'searchTime': search_time,
            'totalResults': len(results),
            'truncated': len(results) > MAX_RESULTS,
            'criteria': dict(criteria.present()),
        })

    except Exception as e:
        print(f"[App] Search error: {e}")
        return jsonify({'error': f'Search failed: {str(e)}'}), 500


@app.route('/reload', methods=['POST'])
def reload():
    """
    Rebuild the indexes from scratch.
    Body (optional JSON): {"lines": [...]} or {"path": "..."}, where path is
    relative to the data directory. No body reloads the configured corpus.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    lines = data.get('lines')
    try:
        start_time = time.perf_counter()
        if lines is not None:
            if not isinstance(lines, list):
                return jsonify({'error': '"lines" must be a list of strings'}), 400
            searcher.load(lines)
        else:
            path = data.get('path')
            path = resolve_corpus_path(path) if path else CORPUS_PATH
            if not os.path.isfile(path):
                return jsonify({'error': f'Corpus file not found: {path}'}), 400
            searcher.load(Parser().load_lines(path))
        build_time = (time.perf_counter() - start_time) * 1000
    except (TypeError, ValueError) as e:
        return jsonify({'error': str(e)}), 400
    except OSError as e:
        print(f"[App] Reload error: {e}")
        return jsonify({'error': f'Could not read corpus: {e}'}), 500

    return jsonify({'status': 'reloaded', 'buildTime': build_time, **searcher.stats()})


@app.route('/health')
def health():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'searcher_initialized': searcher.loaded,
        'index': searcher.stats(),
        'counters': report(),
    })


if __name__ == '__main__':
    ap = argparse.ArgumentParser()
    ap.add_argument("--corpus", type=str, default=CORPUS_PATH, help="text file, one record per line")
    ap.add_argument("--host", type=str, default=DEFAULT_HOST)
    ap.add_argument("--port", type=int, default=DEFAULT_PORT)
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args()

    # Initialize the search engine
    initialize_searcher(args.corpus)

    # Run the Flask app
    app.run(debug=args.debug, host=args.host, port=args.port)
