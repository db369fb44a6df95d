from bs4 import BeautifulSoup
import os
import shutil
import subprocess
import sys
import tempfile

from patch_farcade import OUTPUT_FILE


def extract_inline_scripts(html):
    soup = BeautifulSoup(html, "html.parser")
    return [script.string for script in soup.find_all("script") if script.string]


def bracket_balance(content):
    return {
        "curly": content.count("{") - content.count("}"),
        "paren": content.count("(") - content.count(")"),
        "bracket": content.count("[") - content.count("]"),
    }


def node_check(content):
    """Run `node --check` over a script. Returns (ok, stderr), or None without node."""
    node = shutil.which("node")
    if node is None:
        return None
    fd, tmp_path = tempfile.mkstemp(suffix=".js")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        result = subprocess.run([node, "--check", tmp_path], capture_output=True, text=True)
        return result.returncode == 0, result.stderr
    finally:
        os.remove(tmp_path)


def check_file(filename):
    with open(filename, "r", encoding="utf-8") as f:
        scripts = extract_inline_scripts(f.read())
    print(f"Found {len(scripts)} inline scripts.")

    failures = 0
    for i, script in enumerate(scripts):
        b = bracket_balance(script)
        print(f"SCRIPT {i}: Curlys {b['curly']}, Parens {b['paren']}, Brackets {b['bracket']}")
        checked = node_check(script)
        if checked is None:
            print(f"SCRIPT {i} [SKIP] node not found on PATH")
            continue
        ok, stderr = checked
        if ok:
            print(f"SCRIPT {i} OK")
        else:
            failures += 1
            print(f"SCRIPT {i} ERROR:\n{stderr}")
    return failures


if __name__ == "__main__":
    sys.exit(1 if check_file(sys.argv[1] if len(sys.argv) > 1 else OUTPUT_FILE) else 0)
