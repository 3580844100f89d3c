"""
Runs each HRM test package in its own `manage.py test` process and prints a
per-package summary.

Usage:
    python run_all_tests.py                  # every package
    python run_all_tests.py HR.leave.tests   # selected packages
"""
import re
import subprocess
import sys

TEST_PACKAGES = [
    'core.companies.tests',
    'core.user_accounts.tests',
    'core.dashboard.tests',
    'HR.work_structures.tests',
    'HR.person.tests',
    'HR.attendance.tests',
    'HR.attendance_regularization.tests',
    'HR.leave.tests',
    'HR.notices.tests',
]

TIMEOUT_SECONDS = 300


def _count(pattern, output):
    match = re.search(pattern, output)
    return int(match.group(1)) if match else 0


def summarize(package, output, returncode):
    """Turn unittest runner output into a result row."""
    total = _count(r'Ran (\d+) test', output)
    if total == 0:
        return {'package': package, 'total': 0, 'passed': 0, 'failed': 0,
                'status': 'NO TESTS' if returncode == 0 else 'ERROR'}

    failed = _count(r'failures=(\d+)', output) + _count(r'errors=(\d+)', output)
    return {
        'package': package,
        'total': total,
        'passed': total - failed,
        'failed': failed,
        'status': 'OK' if returncode == 0 and failed == 0 else 'FAILED',
    }


def run_package(package):
    try:
        result = subprocess.run(
            [sys.executable, 'manage.py', 'test', package, '-v', '0'],
            capture_output=True,
            text=True,
            timeout=TIMEOUT_SECONDS
        )
    except subprocess.TimeoutExpired:
        return {'package': package, 'total': 0, 'passed': 0, 'failed': 0, 'status': 'TIMEOUT'}
    return summarize(package, result.stdout + result.stderr, result.returncode)


def main(packages):
    print("=" * 80)
    print("HRM TEST SUITE SUMMARY")
    print("=" * 80)

    results = []
    for package in packages:
        print(f"Running {package}...", end=' ', flush=True)
        result = run_package(package)
        results.append(result)
        print(f"{result['status']} - {result['total']} tests")

    total = sum(r['total'] for r in results)
    passed = sum(r['passed'] for r in results)
    broken = [r for r in results if r['status'] not in ('OK', 'NO TESTS')]

    print()
    print("-" * 80)
    for result in results:
        mark = 'PASS' if result['status'] == 'OK' else result['status']
        print(f"{mark:9} {result['package']:45} {result['passed']:4}/{result['total']:4}")
    print("-" * 80)
    print(f"Total: {total}  Passed: {passed}  Failed: {total - passed}")
    if total:
        print(f"Success rate: {passed / total * 100:.2f}%")

    return 1 if broken else 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:] or TEST_PACKAGES))
