"""
Projects Admin Routes
=====================

- GET  /admin                    project list (search, category, view, detail)
- GET  /admin/new, POST          create form
- GET  /admin/edit/<id>, POST    edit form
- GET  /admin/delete/<id>, POST  confirmation page and confirmed delete
- DELETE /admin/api/projects/<id>  delete from the list page without reload
"""

from flask import render_template, request, redirect, url_for, flash, jsonify, make_response

from . import projects_bp
from .display import ProjectListView, RenderMode
from .forms import ProjectForm, submit_project_form
from .repository import get_repository
from folio.core.config import get_config_value
from folio.core.errors import FormValidationError, StorageError, RepositoryError, ProjectNotFound
from folio.core.guard import admin_required
from folio.core.logging_service import LoggingService
from folio.core.messages import message, field_label


def _form_error_message(error):
    """User-facing text for a failed create/edit submission"""
    if isinstance(error, FormValidationError):
        return message('form_missing_fields', fields=', '.join(field_label(name) for name in error.missing))
    if isinstance(error, StorageError):
        return message('upload_failed', error=error.message)
    return message('create_failed', error=error.message)


def _render_form(form, status=200):
    return render_template('projects/project_form.html', form=form, field_label=field_label), status


# ===== List =====

@projects_bp.route('/')
@projects_bp.route('')
@admin_required
def project_list():
    """Project list - refetched on every visit"""
    projects = []
    load_error = None
    try:
        projects = get_repository().list()
    except RepositoryError as e:
        LoggingService.error('projects', 'Failed to load projects', {'error': e.message})
        load_error = e.message

    view = ProjectListView.from_args(projects, request.args)
    response = make_response(render_template(
        'projects/project_list.html',
        view=view,
        render_modes=list(RenderMode),
        categories=get_config_value('PROJECT_CATEGORIES', []),
        load_error=load_error,
    ))
    response.headers['Cache-Control'] = 'no-store'
    return response


# ===== Create / Edit =====

@projects_bp.route('/new', methods=['GET', 'POST'])
@admin_required
def project_create():
    if request.method == 'GET':
        return _render_form(ProjectForm.for_create())

    form = ProjectForm.from_request(request.form, request.files)
    try:
        submit_project_form(get_repository(), form)
    except (FormValidationError, StorageError, RepositoryError) as e:
        flash(_form_error_message(e), 'error')
        return _render_form(form, 400 if isinstance(e, FormValidationError) else 500)
    except Exception as e:
        LoggingService.log_error_with_traceback('projects', e, {'action': 'create'})
        flash(message('unexpected_error'), 'error')
        return _render_form(form, 500)

    flash(message('create_success'), 'success')
    return redirect(url_for('projects_admin.project_list'))


@projects_bp.route('/edit/<project_id>', methods=['GET', 'POST'])
@admin_required
def project_edit(project_id):
    repository = get_repository()
    try:
        project = repository.get_by_id(project_id)
    except ProjectNotFound:
        flash(message('project_not_found'), 'error')
        return redirect(url_for('projects_admin.project_list'))
    except RepositoryError as e:
        LoggingService.error('projects', f"Failed to load project {project_id}", {'error': e.message})
        return render_template('projects/load_error.html', error=message('load_failed', error=e.message)), 500

    if request.method == 'GET':
        return _render_form(ProjectForm.for_edit(project))

    form = ProjectForm.from_request(request.form, request.files, initial=project, project_id=project.id)
    try:
        submit_project_form(repository, form)
    except (FormValidationError, StorageError) as e:
        flash(_form_error_message(e), 'error')
        return _render_form(form, 400 if isinstance(e, FormValidationError) else 500)
    except RepositoryError as e:
        flash(message('update_failed', error=e.message), 'error')
        return _render_form(form, 500)
    except Exception as e:
        LoggingService.log_error_with_traceback('projects', e, {'action': 'update', 'id': project_id})
        flash(message('unexpected_error'), 'error')
        return _render_form(form, 500)

    flash(message('update_success'), 'success')
    return redirect(url_for('projects_admin.project_list'))


# ===== Delete =====

def _delete_project(project_id):
    """Delete one project; returns (success, user message, status code)"""
    repository = get_repository()
    try:
        project = repository.get_by_id(project_id)
        repository.delete_project(project)
    except ProjectNotFound:
        return False, message('project_not_found'), 404
    except RepositoryError as e:
        return False, message('delete_failed', error=e.message), 500
    return True, message('delete_success'), 200


@projects_bp.route('/delete/<project_id>', methods=['GET', 'POST'])
@admin_required
def project_delete(project_id):
    """Explicit confirmation step, then delete"""
    if request.method == 'GET':
        try:
            project = get_repository().get_by_id(project_id)
        except ProjectNotFound:
            flash(message('project_not_found'), 'error')
            return redirect(url_for('projects_admin.project_list'))
        except RepositoryError as e:
            return render_template('projects/load_error.html', error=message('load_failed', error=e.message)), 500
        return render_template('projects/confirm_delete.html', project=project)

    if request.form.get('confirm') != 'yes':
        flash(message('delete_not_confirmed'), 'info')
        return redirect(url_for('projects_admin.project_list'))

    success, text, _ = _delete_project(project_id)
    flash(text, 'success' if success else 'error')
    return redirect(url_for('projects_admin.project_list'))


@projects_bp.route('/api/projects/<project_id>', methods=['DELETE'])
@admin_required
def api_delete_project(project_id):
    """Delete called by the list page after the browser confirm dialog"""
    success, text, status = _delete_project(project_id)
    if success:
        return jsonify({'success': True, 'message': text})
    return jsonify({'error': text}), status
