#!/usr/bin/env python3
"""
Graph API Explorer — Entry Point.

Sends one request to the Facebook Graph API using the app credentials from a
.env file and prints the decoded response as JSON. For edge endpoints the
next pages can be followed with --pages.

Usage:
    python run.py /me --fields id,name          # GET with the default token
    python run.py /me/feed --pages 2            # Follow two extra pages
    python run.py /me/feed --method POST --param message=Hello
    python run.py /me --token EAAB... --debug   # Explicit token, verbose
    python run.py --version                     # Show version
    python run.py /me --env /path/.env          # Use alternate .env file
"""

import argparse
import json
import sys

from facebook_graph_sdk import Facebook, SDKException, load_config
from facebook_graph_sdk.exceptions import ResponseException
from facebook_graph_sdk.settings import VERSION


def parse_params(pairs):
    """Turn ["key=value", ...] into a dict; exits on a malformed pair."""
    params = {}
    for pair in pairs or []:
        if "=" not in pair:
            print(f"Error: --param expects key=value, got '{pair}'")
            sys.exit(2)
        key, value = pair.split("=", 1)
        params[key] = value
    return params


def main():
    """Parse CLI arguments, send the request and print the result."""
    parser = argparse.ArgumentParser(
        description="Facebook Graph API Explorer - Send a request and print the JSON response"
    )
    parser.add_argument("endpoint", nargs="?", help="Graph endpoint, e.g. /me or /me/friends")
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--beta", action="store_true", help="Send requests to graph.beta.facebook.com")
    parser.add_argument("--token", "-t", help="Access token (overrides FACEBOOK_ACCESS_TOKEN)")
    parser.add_argument("--method", "-m", default="GET", choices=["GET", "POST", "DELETE"], help="HTTP method")
    parser.add_argument("--param", "-p", action="append", help="Request param as key=value (repeatable)")
    parser.add_argument("--fields", "-f", help="Comma-separated fields to request")
    parser.add_argument("--pages", type=int, default=0, help="Number of extra edge pages to follow")
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    args = parser.parse_args()

    if args.version:
        print(f"facebook-graph-sdk {VERSION}")
        sys.exit(0)

    if not args.endpoint:
        parser.error("the endpoint argument is required")

    config = load_config(args.env, args.debug)

    # Apply CLI overrides on top of .env values
    if args.beta:
        config["enable_beta_mode"] = True
    if args.token:
        config["default_access_token"] = args.token

    params = parse_params(args.param)
    if args.fields:
        params["fields"] = args.fields

    try:
        fb = Facebook(config)

        if args.debug:
            print(f"\n{'='*60}")
            print(f"GRAPH API EXPLORER v{VERSION}")
            print("="*60)
            print(f"Endpoint: {args.method} {args.endpoint}")
            print(f"Graph version: {fb.default_graph_version}")

        response = fb.send_request(args.method, args.endpoint, params)
        body = response.decoded_body

        if args.pages > 0 and args.method == "GET":
            edge = response.get_graph_edge()
            pages = [edge.as_array()]
            for _ in range(args.pages):
                edge = fb.next(edge)
                if edge is None:
                    break
                pages.append(edge.as_array())
            body = {"pages": pages}

    except ResponseException as e:
        print(f"Graph error ({e.code}/{e.sub_error_code}, {type(e.previous).__name__}): {e.message}")
        sys.exit(1)
    except SDKException as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    print(json.dumps(body, indent=2, default=str))


if __name__ == "__main__":
    main()
