"""
Currency API routes.

Endpoints:
- GET /api/v1/currency/rates - Current exchange rates against the base currency
- POST /api/v1/currency/convert - Convert an amount between two currencies
- GET /api/v1/currency/supported - List supported currency codes
"""
from flask import request, jsonify, current_app

from extensions import limiter
from services.conversion import UnsupportedCurrencyError
from utils import normalize_currency_code, parse_amount, round_money
from blueprints.api_v1 import api_v1_bp


def get_currency_service():
    """Return the app's shared CurrencyService (built in create_app)."""
    return current_app.extensions['currency_service']


@api_v1_bp.route('/currency/rates', methods=['GET'])
def api_get_rates():
    """Get current exchange rates.

    Returns:
        {
            "base_currency": "PHP",
            "rates": {"USD": 0.018, "EUR": 0.016, ...},
            "date": "2024-01-15",
            "timestamp": 1705312800000,
            "source": "provider",  // provider | fallback
            "status": "cached"     // cached | live | stale | fallback
        }
    """
    service = get_currency_service()
    snapshot, status = service.resolve_rates()

    data = snapshot.to_dict()
    data['base_currency'] = service.base_currency
    data['status'] = status
    return jsonify(data)


@api_v1_bp.route('/currency/convert', methods=['POST'])
@limiter.limit("60 per minute")
def api_convert():
    """Convert an amount between currencies.

    Request body:
        {
            "amount": 100,
            "from_currency": "USD",   // or "fromCurrency"
            "to_currency": "PHP"      // or "toCurrency"
        }

    Returns:
        {
            "original_amount": 100.0,
            "from_currency": "USD",
            "to_currency": "PHP",
            "converted_amount": 5555.56,
            "rate": 55.555556
        }
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    from_currency = normalize_currency_code(
        data.get('from_currency') or data.get('fromCurrency')
    )
    to_currency = normalize_currency_code(
        data.get('to_currency') or data.get('toCurrency')
    )

    if data.get('amount') is None or not from_currency or not to_currency:
        return jsonify({'error': 'amount, from_currency and to_currency are required'}), 400

    if not isinstance(from_currency, str) or not isinstance(to_currency, str):
        return jsonify({'error': 'Currency codes must be strings'}), 400

    try:
        amount = parse_amount(data.get('amount'))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    service = get_currency_service()
    try:
        converted, rate = service.convert_with_rate(amount, from_currency, to_currency)
    except UnsupportedCurrencyError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({
        'original_amount': amount,
        'from_currency': from_currency,
        'to_currency': to_currency,
        'converted_amount': round_money(converted, 2),
        'rate': round_money(rate, 6)
    })


@api_v1_bp.route('/currency/supported', methods=['GET'])
def api_supported_currencies():
    """List supported currency codes.

    Returns:
        {"base_currency": "PHP", "currencies": ["AUD", "CAD", ...]}
    """
    service = get_currency_service()
    return jsonify({
        'base_currency': service.base_currency,
        'currencies': service.supported_currencies()
    })
