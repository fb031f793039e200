"""Allow running as: python -m audit_readiness"""

import sys

from audit_readiness.main import main

if __name__ == "__main__":
    sys.exit(main())
