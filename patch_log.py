import sys
import time

# Set by script entry points; library calls only print
LOG_FILE = None


def log(msg):
    if LOG_FILE:
        try:
            with open(LOG_FILE, "a", encoding="utf-8") as f:
                f.write(f"{time.strftime('%H:%M:%S')} - {msg}\n")
        except OSError as e:
            sys.stderr.write(f"Logging error: {e}\n")
    print(msg)
    sys.stdout.flush()
