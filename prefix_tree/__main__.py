"""
Prefix tree lookup service.

Run:
    python -m prefix_tree --words words.txt --host 0.0.0.0 --port 8000
Then query http://localhost:8000/api/suggest?q=ca
"""

import argparse
import logging

import uvicorn

from prefix_tree.service import create_app, load_words


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Prefix tree lookup service")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument("--words", help="File with one key per line to seed the trie")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s [%(levelname)s] %(message)s")
    trie = load_words(args.words) if args.words else None
    uvicorn.run(create_app(trie), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
