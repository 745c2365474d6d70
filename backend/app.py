import json
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
from pydantic import ValidationError

from converter import LANGUAGES, supported_pairs, translate
from service.config import get_settings
from service.logging import setup_logging
from service.schema import ConvertCodeRequest, ConvertCodeResponse, LanguageInfo
from service.storage import ConversionStore

setup_logging()
logger = logging.getLogger(__name__)

settings = get_settings()
app = Flask(__name__)
CORS(app, resources={r"/*": {"origins": settings.CORS_ORIGINS}})

storage = ConversionStore()


@app.route('/api/convert', methods=['POST'])
def convert_code():
    try:
        body = ConvertCodeRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        errors = [{'field': '.'.join(str(part) for part in error['loc']), 'message': error['msg']}
                  for error in e.errors()]
        logger.warning('Rejected conversion request: %s', errors)
        return jsonify({'message': 'Invalid request', 'errors': errors}), 400
    try:
        result = translate(body.source_code, body.source_language, body.target_language)
        record = storage.create(
            source_code=body.source_code,
            target_code=result['targetCode'],
            source_language=body.source_language,
            target_language=body.target_language,
            explanation=json.dumps(result['explanation']),
        )
        response = ConvertCodeResponse(id=record.id, target_code=result['targetCode'],
                                       explanation=result['explanation'])
        return jsonify(response.model_dump(by_alias=True))
    except Exception as e:
        logger.exception('Failed to convert %s -> %s', body.source_language, body.target_language)
        return jsonify({'message': 'Failed to convert code', 'error': str(e)}), 500


@app.route('/api/conversions/<int:conversion_id>', methods=['GET'])
def get_conversion(conversion_id):
    record = storage.get(conversion_id)
    if record is None:
        return jsonify({'message': 'Conversion not found'}), 404
    return jsonify(record.model_dump(by_alias=True))


@app.route('/api/conversions', methods=['GET'])
def list_conversions():
    return jsonify([record.model_dump(by_alias=True) for record in storage.list()])


@app.route('/api/languages', methods=['GET'])
def list_languages():
    registered = {tag for pair in supported_pairs() for tag in pair}
    languages = [
        LanguageInfo(id=language.tag, display_name=language.display_name, supported=language.tag in registered)
        for language in LANGUAGES
    ]
    return jsonify([language.model_dump(by_alias=True) for language in languages])


@app.route('/supported-features', methods=['GET'])
def supported_features():
    return jsonify({
        'pairs': [{'source': source, 'target': target} for source, target in supported_pairs()],
        'features': [
            'Function and method declarations',
            'Class declarations and constructors',
            'Control structures (if/else, for, while, try/catch)',
            'Counting loops and for-each loops',
            'Print statements',
            'Variable declarations and assignments',
            'Comments and block comments',
            'Logical and comparison operators',
        ]
    })


if __name__ == '__main__':
    app.run(debug=settings.DEBUG, port=settings.PORT, host=settings.HOST)
