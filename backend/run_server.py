"""Entry point for the graphnav API server.

Usage:
    python run_server.py --port 8000 [--web-dir /path/to/viewer/dist] [--notes-path notes.json]
"""

import argparse
import os


def main() -> None:
    parser = argparse.ArgumentParser(description="graphnav API server")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Interface to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--web-dir", type=str, default=None, help="Path to a built viewer")
    parser.add_argument("--notes-path", type=str, default=None, help="JSON file backing /api/nodes")
    parser.add_argument("--graph-source", type=str, default=None, help="default, random, or a URL")
    args = parser.parse_args()

    if args.web_dir:
        os.environ["GRAPHNAV_WEB_DIR"] = args.web_dir
    if args.notes_path:
        os.environ["GRAPHNAV_NOTES_PATH"] = args.notes_path
    if args.graph_source:
        os.environ["GRAPHNAV_GRAPH_SOURCE"] = args.graph_source

    import uvicorn
    from graphnav.main import app

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
