import os
import re
import subprocess
import sys


def test_cli_measurements_line():
    repo_root = os.path.dirname(os.path.dirname(__file__))
    counter = os.path.join(repo_root, 'examples', 'counter.txt')
    printer = os.path.join(repo_root, 'examples', 'printer.txt')

    result = subprocess.run(
        [sys.executable, os.path.join(repo_root, 'rrsched.py'), '0', counter, '0', printer],
        capture_output=True,
        text=True,
        cwd=repo_root,
        check=False,
    )

    assert result.returncode == 0, f"Process exited with {result.returncode}, stderr: {result.stderr}"

    # Ensure the last non-empty line matches the expected format
    lines = [ln.strip() for ln in result.stdout.splitlines() if ln.strip()]
    assert lines, "No output produced"
    last = lines[-1]
    assert re.match(r"^measurements\s+\d+\s+\d+\s+\d+$", last), f"Unexpected last line: {last}\nFull output:\n{result.stdout}"
    assert 'hello from the printer' in lines
    assert '1 2 3 4 5' in lines


def test_cli_rejects_odd_argument_count():
    repo_root = os.path.dirname(os.path.dirname(__file__))
    result = subprocess.run(
        [sys.executable, os.path.join(repo_root, 'rrsched.py'), '0', 'examples/counter.txt', '3'],
        capture_output=True,
        text=True,
        cwd=repo_root,
        check=False,
    )
    assert result.returncode == 1
    assert 'Missing program file for arrival time 3' in result.stderr


def test_cli_missing_program_file():
    repo_root = os.path.dirname(os.path.dirname(__file__))
    result = subprocess.run(
        [sys.executable, os.path.join(repo_root, 'rrsched.py'), '0', 'examples/no_such_program.txt'],
        capture_output=True,
        text=True,
        cwd=repo_root,
        check=False,
    )
    assert result.returncode == 1
    assert 'no_such_program.txt' in result.stderr


def test_cli_too_many_programs():
    repo_root = os.path.dirname(os.path.dirname(__file__))
    args = ['0', 'examples/printer.txt'] * 11
    result = subprocess.run(
        [sys.executable, os.path.join(repo_root, 'rrsched.py')] + args,
        capture_output=True,
        text=True,
        cwd=repo_root,
        check=False,
    )
    assert result.returncode == 1
    assert 'at most 10 programs can be loaded' in result.stderr
