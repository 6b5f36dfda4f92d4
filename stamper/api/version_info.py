# stamper/api/version_info.py

from flask import Blueprint, jsonify
from stamper.version import __version__ as CODE_VERSION, __build__ as CODE_BUILD, version_string


version_bp = Blueprint('version_bp', __name__)


@version_bp.route('/version', methods=['GET'])
def get_version_info():
    """Returns the stamper's own version/build info.
    Response example:
    {
      "version": "0.1.0",
      "build": "20241003",
      "version_full": "0.1.0+20241003"
    }
    """
    return jsonify({
        'version': CODE_VERSION,
        'build': CODE_BUILD or '',
        'version_full': version_string(),
    })
