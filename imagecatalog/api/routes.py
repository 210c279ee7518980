"""
Flask routes for the browser collaborator.

The browser-automation layer posts raw image bytes it intercepted and
receives a distance to display, asks the catalog to keep images the user
saved, and signals shutdown so unsaved changes are flushed.
"""

from __future__ import annotations

import logging
from datetime import datetime

from flask import Blueprint, current_app, jsonify, request

from ..catalog import CatalogStore
from ..exceptions import (
    CatalogIOError,
    DecodeError,
    InvalidFingerprintError,
    InvalidImageNameError,
    WidthMismatchError,
)
from ..scanner import classify_distance, hex_to_bitstring, perceptual_fingerprint, bitstring_to_hex
from ..user_config import get_user_config
from ..utils import validators

# Create blueprint for routes
api = Blueprint('api', __name__)

# Module logger
_logger = logging.getLogger(__name__)


def _store() -> CatalogStore:
    """Catalog store attached to the running application."""
    return current_app.config['CATALOG_STORE']


# =============================================================================
# Route Handlers
# =============================================================================

@api.route('/api/ping')
def api_ping():
    """Simple endpoint for connection monitoring."""
    return jsonify({'status': 'ok', 'time': datetime.now().isoformat()})


@api.route('/api/status')
def api_status():
    """Return catalog statistics."""
    return jsonify(_store().stats())


@api.route('/api/config')
def api_config():
    """Return settings the collaborator displays (bookmarks)."""
    return jsonify({'bookmarks': current_app.config.get('BOOKMARKS', [])})


@api.route('/api/distance', methods=['POST'])
def api_distance():
    """
    Classify a freshly observed image without persisting it.

    Body: raw image bytes.
    """
    data = request.get_data()
    if not data:
        return jsonify({'error': 'Request body required'}), 400

    try:
        fingerprint = perceptual_fingerprint(data)
    except DecodeError as e:
        return jsonify({'error': str(e)}), 422

    distance = _store().min_distance(fingerprint)
    return jsonify({
        'distance': distance,
        'fingerprint': bitstring_to_hex(fingerprint),
        'classification': classify_distance(distance),
    })


@api.route('/api/images', methods=['POST'])
def api_add_image():
    """
    Keep an image the user chose to save.

    Query: name (file name), fingerprint (optional, hex).
    Body: raw image bytes.
    """
    name = request.args.get('name', '').strip()
    fingerprint_hex = request.args.get('fingerprint', '').strip()
    data = request.get_data()

    if not data:
        return jsonify({'error': 'Request body required'}), 400

    fingerprint = None
    if fingerprint_hex:
        is_valid, error = validators.validate_fingerprint_hex(fingerprint_hex)
        if not is_valid:
            return jsonify({'error': error}), 400
        fingerprint = hex_to_bitstring(fingerprint_hex)

    try:
        record = _store().add_image(name, data, fingerprint)
    except (InvalidImageNameError, InvalidFingerprintError, WidthMismatchError) as e:
        return jsonify({'error': str(e)}), 400
    except CatalogIOError as e:
        _logger.error(f"Failed to save {name}: {e}")
        return jsonify({'error': f'Failed to save image: {e}'}), 500

    return jsonify({'status': 'saved', 'image': record.to_dict()}), 201


@api.route('/api/duplicates')
def api_duplicates():
    """Return exact duplicate groups."""
    groups = _store().duplicate_groups()
    return jsonify({
        'group_count': len(groups),
        'groups': [g.to_dict() for g in groups],
    })


@api.route('/api/similar')
def api_similar():
    """
    Return near-duplicate pairs across the catalog.

    Query: threshold, limit (defaults from the user configuration).
    """
    config = get_user_config()
    threshold = request.args.get('threshold', config.similarity_threshold)
    limit = request.args.get('limit', config.similarity_sample_limit)

    is_valid, error = validators.validate_threshold(threshold)
    if not is_valid:
        return jsonify({'error': error}), 400
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return jsonify({'error': 'Limit must be an integer'}), 400
    if limit < 2:
        return jsonify({'error': 'Limit must be at least 2'}), 400

    pairs = _store().similar_pairs(threshold=int(threshold), limit=limit)
    return jsonify({
        'threshold': int(threshold),
        'pair_count': len(pairs),
        'pairs': [p.to_dict() for p in pairs],
    })


@api.route('/api/scan', methods=['POST'])
def api_scan():
    """Reconcile the catalog with the directory and return statistics."""
    try:
        stats = _store().scan()
    except CatalogIOError as e:
        _logger.error(f"Scan failed: {e}")
        return jsonify({'error': str(e)}), 500
    return jsonify(stats.to_dict())


@api.route('/api/shutdown', methods=['POST'])
def api_shutdown():
    """Browser disconnected: flush unsaved changes."""
    try:
        saved = _store().flush()
    except CatalogIOError as e:
        _logger.error(f"Flush on shutdown failed: {e}")
        return jsonify({'error': str(e)}), 500
    return jsonify({'status': 'flushed', 'saved': saved})
