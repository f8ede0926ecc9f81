import re

RE_VERSION = re.compile(r"\d+(?:\.\d+)*")
RE_EPOCH = re.compile(r"^\d+:")


def version_lt(a: str, b: str) -> bool:
    """
    True when version ``a`` sorts strictly before ``b``.

    Components are compared as integers, left to right; a shorter version is
    padded with zeros, so "1.2" equals "1.2.0". If any component of either
    side is not an integer the two strings are compared lexically instead.
    """
    if a == b:
        return False

    left, right = a.split("."), b.split(".")
    try:
        nums_a = [int(c) for c in left]
        nums_b = [int(c) for c in right]
    except ValueError:
        return a < b

    width = max(len(nums_a), len(nums_b))
    nums_a += [0] * (width - len(nums_a))
    nums_b += [0] * (width - len(nums_b))
    return nums_a < nums_b


def extract_version(text: str | None) -> str | None:
    """
    Pull the first dotted numeric token out of tool or package manager output.

    "NVIM v0.8.3" -> "0.8.3", "1:0.9.5-2" -> "0.9.5", "starship 1.17.1" -> "1.17.1"
    """
    if not text:
        return None
    for line in text.splitlines():
        line = RE_EPOCH.sub("", line.strip())
        m = RE_VERSION.search(line)
        if m:
            return m.group(0)
    return None
