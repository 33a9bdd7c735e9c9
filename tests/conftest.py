import sys, os

# Ensure src and the test helpers are on path for test imports
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC = os.path.join(ROOT, 'src')
TESTS = os.path.join(ROOT, 'tests')
for path in (SRC, TESTS):
    if path not in sys.path:
        sys.path.insert(0, path)
