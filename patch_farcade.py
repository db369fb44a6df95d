import os
import shutil
import sys
import tempfile

from farcade_rules import ALREADY_PRESENT, apply_rules, build_rules
import patch_log
from patch_log import log

# Define paths
INDEX_TEMPLATE = "index.html"
OUTPUT_FILE = "index.farcade.html"


class PatchError(Exception):
    def __init__(self, path, message):
        super().__init__(f"{message}: {path}")
        self.path = path


class ReadError(PatchError):
    pass


class WriteError(PatchError):
    pass


def read_file(file_path):
    try:
        with open(file_path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(file_path, f"Error reading file ({e})") from e


def write_file(file_path, content):
    """Write content next to file_path, then swap it in with os.replace."""
    dest_dir = os.path.dirname(os.path.abspath(file_path))
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".farcade-", suffix=".tmp", dir=dest_dir)
        # newline="" keeps the source's line endings byte for byte
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        # mkstemp creates 0600, give the output the mode a plain open() would
        if os.path.exists(file_path):
            shutil.copymode(file_path, tmp_path)
        else:
            umask = os.umask(0)
            os.umask(umask)
            os.chmod(tmp_path, 0o666 & ~umask)
        os.replace(tmp_path, file_path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise WriteError(file_path, f"Error writing file ({e})") from e
    log(f"Successfully created file: {file_path}")


def patch(source_path, dest_path, rules=None):
    """Patch source_path into dest_path.

    Returns {step name: matched label, "already-present" or None}.
    """
    if rules is None:
        rules = build_rules()

    log(f"Reading {source_path}...")
    html = read_file(source_path)

    log("Applying Farcade SDK injections...")
    html, report = apply_rules(html, rules, log=log)

    log(f"Writing to {dest_path}...")
    write_file(dest_path, html)
    return report


def main():
    patch_log.LOG_FILE = "patch_debug.log"
    log("Starting Farcade integration process...")
    try:
        report = patch(INDEX_TEMPLATE, OUTPUT_FILE)
    except PatchError as e:
        print(f"Error: {e}")
        sys.exit(1)

    missing = [name for name, label in report.items() if label is None]
    if missing:
        log(f"[WARN] Hooks not injected: {', '.join(missing)}")
    present = [name for name, label in report.items() if label == ALREADY_PRESENT]
    if present:
        log(f"[SKIP] Hooks already in source: {', '.join(present)}")

    log(f"Farcade integration complete! Output file: {OUTPUT_FILE}")
    print("The integrated version will:")
    print("- Signal ready when the title screen is interactive")
    print("- Submit height in meters as the score on game over")
    print("- Handle play again requests by restarting the game")
    print("- Handle mute/unmute requests via Phaser sound manager")


if __name__ == "__main__":
    main()
