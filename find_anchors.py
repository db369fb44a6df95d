import sys

from farcade_rules import build_rules


def locate_anchors(html, rules=None):
    """Return (step, label, line) for every alternative; line is None when absent."""
    if rules is None:
        rules = build_rules()
    found = []
    for step in rules:
        for rule in step.alternatives:
            match = rule.pattern.search(html)
            line = html.count("\n", 0, match.start()) + 1 if match else None
            found.append((step.name, rule.label, line))
    return found


def find_anchors(filename, context=80):
    with open(filename, 'r', encoding='utf-8', errors='ignore') as f:
        content = f.read()

    for step in build_rules():
        for rule in step.alternatives:
            match = rule.pattern.search(content)
            if not match:
                print(f"[MISSING] {step.name}/{rule.label}")
                continue
            line = content.count("\n", 0, match.start()) + 1
            print(f"--- {step.name}/{rule.label} at line {line} ---")
            print(content[max(0, match.start() - context): min(len(content), match.end() + context)])
            print("--------------------")


if __name__ == "__main__":
    if len(sys.argv) > 2:
        print("Usage: python find_anchors.py [file]")
    else:
        find_anchors(sys.argv[1] if len(sys.argv) > 1 else "index.html")
