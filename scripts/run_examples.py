import sys
from pathlib import Path

# Add project root to sys.path so 'boolsop' is found when run as a script
sys.path.append(str(Path(__file__).parent.parent))

from boolsop.examples import main

if __name__ == "__main__":
    main()
