# stamper/__init__.py

import logging
from flask import Flask
from stamper.config import Config

# Configure root logger - Use a simple format, prefixes will be added in messages
logging.basicConfig(level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
                    format='%(asctime)s - %(levelname)s - %(message)s')

# Reduce Werkzeug logging noise for cleaner output
werkzeug_logger = logging.getLogger('werkzeug')
werkzeug_logger.setLevel(logging.WARNING)

app = Flask(__name__)
app.config.from_object(Config)
# Keep variants in pass order in JSON responses
app.json.sort_keys = False

# Register Blueprints
from stamper.api.stamps import stamps_bp
app.register_blueprint(stamps_bp, url_prefix='/api')

from stamper.api.version_info import version_bp
app.register_blueprint(version_bp, url_prefix='/api')
