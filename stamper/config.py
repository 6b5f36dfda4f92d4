# stamper/config.py

import os
from dotenv import load_dotenv
load_dotenv()

class Config:
    # Variant stamped when the caller does not name one ('release' or 'debug')
    DEFAULT_VARIANT = os.environ.get('STAMPER_DEFAULT_VARIANT', 'release')
    # Default CLI output format: 'properties', 'json' or 'env'
    OUTPUT_FORMAT = os.environ.get('STAMPER_OUTPUT_FORMAT', 'properties')
    # Base application id; each flavor appends its own suffix
    APPLICATION_ID = os.environ.get('STAMPER_APPLICATION_ID', 'com.woofahrayetcode.groceryguardian')
    # Distribution flavors (comma-separated in the env or defaults to play,oss)
    FLAVORS = [f.strip() for f in os.environ.get('STAMPER_FLAVORS', 'play,oss').split(',') if f.strip()]
    # Bind address for `stamper serve`
    HOST = os.environ.get('STAMPER_HOST', '127.0.0.1')
    PORT = int(os.environ.get('STAMPER_PORT', '5000'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
