#!/usr/bin/env python3
"""
Test runner script for the SocialX gateway
Runs the pytest suite, optional coverage, and checks a running server's API docs
"""

import subprocess
import sys
import time
import argparse

import httpx


def run_command(command, description, check=True):
    """Run a command and handle output"""
    print(f"\n{'=' * 60}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(command)}")
    print("=" * 60)

    try:
        result = subprocess.run(command, check=check, text=True)

        if result.returncode == 0:
            print(f"✅ {description} completed successfully")
        else:
            print(f"❌ {description} failed with return code {result.returncode}")

        return result.returncode == 0

    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed with return code {e.returncode}")
        return False


def check_server_running(host="localhost", port=3000, timeout=30):
    """Check if the gateway is running"""
    url = f"http://{host}:{port}/health"

    print(f"Checking if server is running at {url}...")

    for attempt in range(timeout):
        try:
            response = httpx.get(url, timeout=5)
            if response.status_code == 200:
                print("✅ Server is running and healthy")
                return True
        except httpx.RequestError:
            pass

        if attempt < timeout - 1:
            print(f"Waiting for server... (attempt {attempt + 1}/{timeout})")
            time.sleep(1)

    print(f"❌ Server is not responding after {timeout} seconds")
    return False


def run_unit_tests():
    """Run unit and integration tests"""
    command = [sys.executable, "-m", "pytest", "tests/", "-v", "--tb=short"]
    return run_command(command, "Unit and Integration Tests", check=False)


def run_coverage():
    """Run the suite with coverage reporting"""
    command = [
        sys.executable,
        "-m",
        "pytest",
        "tests/",
        "--cov",
        "--cov-report=term-missing",
        "--cov-report=html:coverage",
    ]
    return run_command(command, "Coverage", check=False)


def run_api_documentation_tests(host="localhost", port=3000):
    """Check the OpenAPI schema and docs pages of a running server"""
    if not check_server_running(host, port):
        print("❌ Cannot test API documentation - server is not running")
        return False

    base_url = f"http://{host}:{port}"

    try:
        response = httpx.get(f"{base_url}/openapi.json", timeout=10)
        if response.status_code != 200:
            print(f"❌ OpenAPI schema request failed: {response.status_code}")
            return False

        schema = response.json()
        required_fields = ["openapi", "info", "paths"]
        missing_fields = [field for field in required_fields if field not in schema]
        if missing_fields:
            print(f"❌ OpenAPI schema missing fields: {missing_fields}")
            return False

        paths = schema.get("paths", {})
        expected_endpoints = ["/", "/health", "/routes", "/limits", "/api/{path}"]
        missing_endpoints = [ep for ep in expected_endpoints if ep not in paths]
        if missing_endpoints:
            print(f"❌ Missing endpoint documentation: {missing_endpoints}")
            return False

        print("✅ OpenAPI schema validation passed")

        for endpoint in ["/docs", "/redoc"]:
            response = httpx.get(f"{base_url}{endpoint}", timeout=10)
            if response.status_code != 200:
                print(f"❌ Documentation page {endpoint} not accessible")
                return False

        print("✅ Documentation pages accessible")
        return True

    except httpx.HTTPError as e:
        print(f"❌ API documentation test failed: {e}")
        return False


def main():
    """Main test runner"""
    parser = argparse.ArgumentParser(description="SocialX Gateway Test Runner")
    parser.add_argument("--unit", action="store_true", help="Run unit tests only")
    parser.add_argument("--coverage", action="store_true", help="Run tests with coverage")
    parser.add_argument(
        "--docs", action="store_true", help="Test API documentation of a running server"
    )
    parser.add_argument("--host", default="localhost", help="Gateway host")
    parser.add_argument("--port", type=int, default=3000, help="Gateway port")

    args = parser.parse_args()

    if not any([args.unit, args.coverage, args.docs]):
        args.unit = True

    print("🚀 SocialX Gateway Test Suite")

    results = []

    if args.unit:
        results.append(("Unit Tests", run_unit_tests()))

    if args.coverage:
        results.append(("Coverage", run_coverage()))

    if args.docs:
        results.append(
            ("API Documentation Tests", run_api_documentation_tests(args.host, args.port))
        )

    print(f"\n{'=' * 60}")
    print("TEST SUMMARY")
    print("=" * 60)

    all_passed = True
    for test_name, success in results:
        status = "✅ PASSED" if success else "❌ FAILED"
        print(f"{test_name}: {status}")
        if not success:
            all_passed = False

    print(
        f"\nOverall Result: {'✅ ALL TESTS PASSED' if all_passed else '❌ SOME TESTS FAILED'}"
    )

    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
