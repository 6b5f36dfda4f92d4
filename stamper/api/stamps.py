# stamper/api/stamps.py

import logging
from flask import Blueprint, request, jsonify, current_app
from stamper.models.stamp import InvalidInput
from stamper.models import variants as variants_model
from stamper.services import version_stamper

stamps_bp = Blueprint('stamps_bp', __name__)

# Logging is configured in __init__.py


def _request_instant():
    """Returns the instant from the 'at' query parameter, or reads the clock once."""
    at = request.args.get('at')
    if at:
        return version_stamper.to_instant(at)
    return version_stamper.capture_instant()


def _variant_payload(name, stamp):
    flavor, build_type = variants_model.resolve_variant(name)
    payload = {
        'variant': name,
        'flavor': flavor,
        'buildType': build_type.value,
    }
    registered = variants_model.get_flavor(flavor) if flavor else None
    if registered is not None:
        payload['applicationId'] = registered.application_id
    payload.update(stamp.to_dict())
    return payload


@stamps_bp.route('/stamp', methods=['GET'])
def get_stamp():
    """Stamps a single variant.
    Response example:
    {
      "variant": "playDebug",
      "flavor": "play",
      "buildType": "debug",
      "applicationId": "com.example.app.play",
      "versionCode": 20241003,
      "versionName": "2024.10.03 14:05:09 UTC",
      "instant": "2024-10-03T14:05:09+00:00"
    }
    """
    name = request.args.get('variant') or current_app.config.get('DEFAULT_VARIANT', 'release')
    try:
        instant = _request_instant()
        _, build_type = variants_model.resolve_variant(name)
        stamp = version_stamper.stamp(instant, build_type)
    except InvalidInput as e:
        logging.warning(f"[API:/stamp] Rejected request for '{name}': {e}")
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logging.exception(f"[API:/stamp] Unexpected error stamping '{name}': {e}")
        return jsonify({'error': 'Failed to compute version stamp.'}), 500

    payload = _variant_payload(name, stamp)
    payload['instant'] = instant.isoformat()
    logging.info(f"[API:/stamp] {name}: {stamp.code} / '{stamp.name}'")
    return jsonify(payload)


@stamps_bp.route('/stamps', methods=['GET'])
def get_stamps():
    """Stamps a whole configuration pass (every registered variant by default) from one instant."""
    names = request.args.getlist('variant') or None
    try:
        instant = _request_instant()
        stamps = version_stamper.stamp_pass(instant, names)
    except InvalidInput as e:
        logging.warning(f"[API:/stamps] Rejected pass request: {e}")
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logging.exception(f"[API:/stamps] Unexpected error stamping pass: {e}")
        return jsonify({'error': 'Failed to compute version stamps.'}), 500

    return jsonify({
        'instant': instant.isoformat(),
        'variants': {name: _variant_payload(name, s) for name, s in stamps.items()},
    })


@stamps_bp.route('/flavors', methods=['GET'])
def get_flavors():
    """Lists the registered distribution flavors."""
    return jsonify({'flavors': [f.to_dict() for f in variants_model.FLAVORS.values()]})
