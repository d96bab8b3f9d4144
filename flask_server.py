"""
Task list API server (`flask_server.py`)
"""

import logging

from taskapi import create_app
from taskapi.config import Config

config = Config.from_env()
logging.basicConfig(level=config.log_level)

app = create_app(config)

if __name__ == '__main__':
    # Run Flask app on port 5001 unless TASKS_PORT says otherwise
    app.run(host=config.host, port=config.port, debug=not config.production)
