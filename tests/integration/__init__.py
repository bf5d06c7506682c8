"""
Integration Tests Package for the Parqueadero Management System

Integration tests verify that the application service, the parking lot
aggregate, the repository, the event bus and the command line entry point
work together.
"""

import sys
from pathlib import Path

# Add the src directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))
