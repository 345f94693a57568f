#!/usr/bin/env python3
"""Send a diff to a running diffnum API and compare it with the CLI."""

import argparse
import json
import os
import subprocess
import sys

import requests

from diffnum.settings import OPTIONS_ENV_VAR


def main():
    """Post the diff read from stdin and report the result."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("options", nargs="*", metavar="key=value")
    parser.add_argument("--url", default="http://127.0.0.1:8000/annotate")
    args = parser.parse_args()

    diff = sys.stdin.read()
    print(f"Posting {len(diff)} characters to {args.url}")

    try:
        response = requests.post(
            args.url, json={"diff": diff, "options": args.options}, timeout=60
        )
    except requests.exceptions.RequestException as e:
        print(f"Request failed: {e}")
        return 1

    print(f"Status Code: {response.status_code}")
    if response.status_code != 200:
        print(response.text[:500])
        return 1

    result = response.json()
    if not result.get("ok"):
        error = result.get("error", {})
        print(f"Error Code: {error.get('code')}")
        print(f"Error Message: {error.get('message')}")
        return 1

    data = result["data"]
    print(f"Summary: {data['summary']}")
    print(f"Checksum: {data['provenance']['checksum']}")

    # The API never sees DIFFNUM_OPTIONS; an empty value also keeps .env from setting it.
    env = dict(os.environ, **{OPTIONS_ENV_VAR: ""})
    cli = subprocess.run(
        [sys.executable, "-m", "diffnum", "--json", *args.options],
        input=diff,
        capture_output=True,
        text=True,
        env=env,
    )
    cli_result = json.loads(cli.stdout)
    if not cli_result.get("ok"):
        print(f"CLI failed: {cli_result.get('error', {}).get('code')}")
        return 1

    if cli_result["data"]["provenance"]["checksum"] == data["provenance"]["checksum"]:
        print("Checksum matches CLI output")
        return 0
    print("Checksum differs from CLI output")
    return 1


if __name__ == "__main__":
    sys.exit(main())
