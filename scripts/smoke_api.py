#!/usr/bin/env python3
"""Smoke check for a running diffguard API server."""

import argparse
import json
import sys

import requests


def run_smoke(base_url: str, paths: list, base_ref: str, head_ref: str) -> int:
    """Hit /health and /diff and print a short summary."""
    health = requests.get(f"{base_url}/health", timeout=10)
    health.raise_for_status()
    print(f"Health: {health.json()}")

    body = {"base_ref": base_ref, "head_ref": head_ref}
    if paths:
        body["paths"] = paths

    response = requests.post(f"{base_url}/diff", json=body, timeout=60)
    print(f"Status Code: {response.status_code}")
    result = response.json()

    if not result.get("ok"):
        error = result.get("error", {})
        print(f"Error {error.get('code')}: {error.get('message')}")
        return 1

    data = result["data"]
    for file_data in data["files"]:
        print(
            f"{file_data['path']}: +{len(file_data['added_lines'])} "
            f"-{len(file_data['removed_lines'])}"
        )
    for skipped in data["skipped"]:
        print(f"skipped {skipped['path']}: {skipped['error']['code']}")
    print(f"Checksum: {data['provenance']['checksum']}")

    with open("api_response.json", "w") as f:
        json.dump(result, f, indent=2)
    print("Response saved to api_response.json")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Smoke test the diffguard API")
    parser.add_argument("--url", default="http://127.0.0.1:8000")
    parser.add_argument("--path", action="append", dest="paths")
    parser.add_argument("--base", default="HEAD^")
    parser.add_argument("--head", default="HEAD")
    args = parser.parse_args()

    try:
        return run_smoke(args.url, args.paths, args.base, args.head)
    except requests.exceptions.RequestException as e:
        print(f"Request failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
