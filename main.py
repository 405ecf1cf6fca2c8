"""
GitHub Repository Analyzer
Run the Flask REST API server, or analyze a single profile from the command line.
Usage:
    python main.py
    python main.py --port 8000
    python main.py --debug
    python main.py --analyze octocat --min-tokens 500000
"""

import argparse
import json
import logging
import sys

from TokenScanner.Business.ProfileAnalyzer import DEFAULT_MIN_TOKENS, ProfileAnalyzer
from TokenScanner.GitHub.GitHubClient import GitHubClient
from TokenScanner.Routes.AnalyzeRoute import CreateApp
from TokenScanner.Routes.validators import status_for_report
from TokenScanner.Utility.config import Settings, load_env_file
from TokenScanner.Utility.url import parse_username

# Create the Flask app globally so Gunicorn can find it
app = CreateApp()


def run_analysis(username: str, min_tokens: int) -> int:
    load_env_file()
    settings = Settings.from_env()
    client = GitHubClient(token=settings.github_token, api_root=settings.api_root, timeout=settings.request_timeout)
    report = ProfileAnalyzer(client).analyze_profile(parse_username(username), min_tokens).to_dict()
    print(json.dumps(report, indent=2))
    return 0 if status_for_report(report) == 200 else 1


def main():
    """Parse arguments and start the API server or a one-shot analysis."""
    parser = argparse.ArgumentParser(
        description="GitHub Repository Analyzer",
        epilog="""
            Examples:
            python main.py                              # Start on port 5000
            python main.py --port 8000                  # Start on port 8000
            python main.py --analyze octocat            # Print a report as JSON
        """
    )
    parser.add_argument('--port', type=int, default=5000, help='Port to run the server on (default: 5000)')
    parser.add_argument('--host', default='0.0.0.0', help='Host to bind to (default: 0.0.0.0)')
    parser.add_argument('--debug', action='store_true', help='Run in debug mode')
    parser.add_argument('--analyze', metavar='USERNAME', help='Analyze USERNAME (or profile URL) and exit')
    parser.add_argument(
        '--min-tokens',
        type=int,
        default=DEFAULT_MIN_TOKENS,
        help=f'Token threshold used with --analyze (default: {DEFAULT_MIN_TOKENS})'
    )

    args = parser.parse_args()

    if args.analyze:
        sys.exit(run_analysis(args.analyze, args.min_tokens))

    print(f"\n{'='*60}")
    print("GitHub Repository Analyzer API Server")
    print(f"{'='*60}")
    print(f"Server starting on http://{args.host}:{args.port}")
    print(f"Debug mode: {args.debug}")
    print(f"\nEndpoints:")
    print(f"  GET  http://{args.host}:{args.port}/api/health-check")
    print(f"  POST http://{args.host}:{args.port}/api/analyze")
    print(f"{'='*60}\n")

    try:
        app.run(
            host=args.host,
            port=args.port,
            debug=args.debug,
            use_reloader=args.debug
        )
    except KeyboardInterrupt:
        print("\n\nServer stopped by user")
        sys.exit(0)
    except Exception as e:
        logging.getLogger(__name__).error("Error starting server: %s", e)
        sys.exit(1)


if __name__ == '__main__':
    main()
