"""
Entry point for the Personnel Registry Backend
"""

import sys
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from personnel.config.settings import LOG_LEVEL, PORT
from personnel.app import app

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Personnel Registry Backend on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
