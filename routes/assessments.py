"""
Assessment API Routes
Submits site assessments, returns stored results and renders PDF reports
"""
from flask import Blueprint, request, make_response
import logging

from services.database import DatabaseService, new_id
from services.feasibility import FeasibilityService
from services.models import InvalidInputError
from services.rainfall import create_rainfall_resolver
from services.report_renderer import ReportRenderer
from services.structure_details import build_report_context
from utils import config
from utils.cors import jsonify_with_cors, add_cors_headers
from utils.validation import parse_site_input

logger = logging.getLogger(__name__)

# Create blueprint
assessments_bp = Blueprint('assessments', __name__)

# Initialize services
db_service = DatabaseService()
feasibility_service = FeasibilityService(
    create_rainfall_resolver(config, config.FEASIBILITY_CONFIG),
    config.FEASIBILITY_CONFIG
)
report_renderer = ReportRenderer(config.REPORT_FONT_PATH, config.REPORT_FONT_BOLD_PATH)


@assessments_bp.route('/api/assessment', methods=['POST'])
def submit_assessment():
    """
    Run a feasibility assessment and store it

    Expected JSON payload:
    {
        "phone": "9876543210",
        "fullName": "Optional Name",
        "location": "Jaipur, Rajasthan",
        "roofArea": 120,
        "roofType": "rcc",            // rcc | metal | tile | asbestos | other
        "existingWell": "borewell",   // none | borewell | openwell | both
        "purpose": "recharge",        // storage | recharge | both | consultation
        "waterUsage": 450,            // OPTIONAL liters/day, sizes storage tanks
        "groundwaterDepth": 18,       // OPTIONAL meters
        "soilType": "sandy"           // OPTIONAL
    }

    Returns (201):
    {
        "message": "Assessment submitted successfully!",
        "assessmentId": "assessment_...",
        "reportId": "report_...",
        "feasibility": "MODERATELY SUITABLE",
        "rainfallSource": "live"
    }
    """
    try:
        data = request.get_json(silent=True)

        if not data:
            return jsonify_with_cors({'error': 'No JSON data provided'}), 400

        phone = data.get('phone')
        if not phone or not isinstance(phone, str):
            return jsonify_with_cors({'error': 'Invalid or missing phone number in form data.', 'field': 'phone'}), 400

        site = parse_site_input(data)

        if not db_service.enabled:
            return jsonify_with_cors({'error': 'Database not configured'}), 503

        user = db_service.find_or_create_user(phone.strip(), data.get('fullName'))
        if not user:
            return jsonify_with_cors({'error': 'Error processing form submission. Please try again.'}), 500

        result = feasibility_service.assess(site)

        assessment_id = new_id('assessment')
        report_id = new_id('report')

        for saved in (db_service.save_assessment(assessment_id, user['id'], site),
                      db_service.save_report(report_id, assessment_id, result)):
            if saved.get('status') != 'success':
                logger.error(f"Failed to store assessment {assessment_id}: {saved.get('message')}")
                return jsonify_with_cors({'error': 'Error processing form submission. Please try again.'}), 500

        logger.info(f"Assessment {assessment_id} stored: {result.feasibility_tier}, {result.recommended_structure}")

        return jsonify_with_cors({
            'message': 'Assessment submitted successfully!',
            'assessmentId': assessment_id,
            'reportId': report_id,
            'feasibility': result.feasibility_tier,
            'rainfallSource': result.rainfall_source
        }), 201

    except InvalidInputError as e:
        return jsonify_with_cors({'error': str(e), 'field': e.field}), 400
    except Exception as e:
        logger.error(f"Error in assessment submission: {str(e)}", exc_info=True)
        return jsonify_with_cors({'error': 'Error processing form submission. Please try again.'}), 500


@assessments_bp.route('/api/assessment/<assessment_id>', methods=['GET'])
def get_assessment(assessment_id):
    """Stored site input and feasibility result"""
    try:
        assessment = db_service.get_assessment(assessment_id)
        result = db_service.get_report(assessment_id)

        if not assessment or not result:
            return jsonify_with_cors({
                'status': 'error',
                'message': f'Assessment or report not found for ID: {assessment_id}'
            }), 404

        return jsonify_with_cors({
            'status': 'success',
            'assessmentId': assessment_id,
            'assessment': assessment['site'].to_dict(),
            'report': result.to_dict()
        }), 200

    except Exception as e:
        logger.error(f"Error retrieving assessment {assessment_id}: {str(e)}", exc_info=True)
        return jsonify_with_cors({'status': 'error', 'message': 'Failed to retrieve assessment'}), 500


@assessments_bp.route('/api/report/<assessment_id>', methods=['GET'])
def download_report(assessment_id):
    """Render the stored assessment as a downloadable PDF"""
    lang = request.args.get('lang', 'en')
    if lang not in config.SUPPORTED_LANGUAGES:
        lang = 'en'

    try:
        assessment = db_service.get_assessment(assessment_id)
        result = db_service.get_report(assessment_id)

        if not assessment or not result:
            return jsonify_with_cors({'error': 'Assessment or Report not found.'}), 404

        user = db_service.get_user(assessment['user_id'])
        context = build_report_context(assessment['site'], result, lang, user, config.FEASIBILITY_CONFIG)
        pdf_bytes = report_renderer.render(context)

        response = make_response(pdf_bytes)
        response.headers['Content-Type'] = 'application/pdf'
        response.headers['Content-Disposition'] = f'attachment; filename="RWHGenius_Report_{assessment_id}.pdf"'
        return add_cors_headers(response)

    except Exception as e:
        logger.error(f"PDF generation failed for {assessment_id}: {str(e)}", exc_info=True)
        return jsonify_with_cors({'error': 'Error generating report. Check server logs for details.'}), 500
