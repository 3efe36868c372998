"""
Projects Public Routes
======================

Public-facing project portfolio page and API.
"""

import logging
from flask import Blueprint, render_template, jsonify, request

from folio.core.config import get_config_value
from folio.core.errors import RepositoryError
from folio.core.logging_service import LoggingService
from folio.modules.projects.display import ProjectListView
from folio.modules.projects.repository import get_repository

logger = logging.getLogger(__name__)

projects_public_bp = Blueprint('projects', __name__, url_prefix='/projects', template_folder='templates')
projects_api_bp = Blueprint('projects_api', __name__, url_prefix='/api')


# ===== Routes =====

@projects_public_bp.route('/')
def projects_list():
    """Public projects listing"""
    projects = []
    load_error = None
    try:
        projects = get_repository().list()
    except RepositoryError as e:
        logger.error(f"Error getting projects: {e.message}")
        load_error = e.message

    view = ProjectListView.from_args(projects, request.args)
    return render_template(
        'projects_public/projects.html',
        view=view,
        categories=get_config_value('PROJECT_CATEGORIES', []),
        load_error=load_error,
    )


# ===== API Routes =====

@projects_api_bp.route('/projects', methods=['GET'])
def get_projects():
    """All projects, newest first"""
    try:
        projects = get_repository().list()
    except RepositoryError as e:
        LoggingService.log_api_call('api', '/api/projects', 'GET', 500, {'error': e.message})
        return jsonify({'error': e.message}), 500
    return jsonify([project.to_dict() for project in projects])


@projects_api_bp.route('/projects', methods=['POST'])
def create_project():
    """Create a project from a JSON body and return the stored record"""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        LoggingService.log_api_call('api', '/api/projects', 'POST', 500, {'error': 'Body is not a JSON object'})
        return jsonify({'error': 'Server error'}), 500

    try:
        project = get_repository().insert(body)
    except RepositoryError as e:
        LoggingService.log_api_call('api', '/api/projects', 'POST', 500, {'error': e.message})
        return jsonify({'error': e.message}), 500
    except Exception as e:
        LoggingService.log_error_with_traceback('api', e)
        return jsonify({'error': 'Server error'}), 500

    LoggingService.log_api_call('api', '/api/projects', 'POST', 200, {'id': project.id})
    return jsonify(project.to_dict())
