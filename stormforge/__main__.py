"""Allow ``python -m stormforge``."""

from stormforge.main import run

if __name__ == "__main__":
    run()
