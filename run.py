import sys
import logging

from ekflow.config import configure_logging
from ekflow.main import main

# Configure logging
configure_logging('INFO')
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    sys.exit(main())
