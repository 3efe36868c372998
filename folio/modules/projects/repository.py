"""
Project Repository
==================

One method per backend call for the projects table and image bucket.
No caching and no retries: a failure is raised to the caller, who decides
what the user sees.
"""

import logging

from folio.core import storage
from folio.core.backend import get_backend
from folio.core.errors import BackendError, RepositoryError, ProjectNotFound
from folio.core.logging_service import LoggingService
from .models import Project, build_payload

logger = logging.getLogger(__name__)


class ProjectRepository:

    def __init__(self, backend):
        self.backend = backend

    def list(self):
        """All projects, newest first"""
        try:
            rows = self.backend.select_projects()
        except BackendError as e:
            raise RepositoryError(e.message) from e
        return [Project.from_row(row) for row in rows]

    def get_by_id(self, project_id):
        """Single project.

        Raises:
            ProjectNotFound: no row has this id.
            RepositoryError: the query itself failed.
        """
        if not project_id:
            raise ProjectNotFound(project_id)
        try:
            row = self.backend.select_project(project_id)
        except BackendError as e:
            raise RepositoryError(e.message) from e
        if row is None:
            raise ProjectNotFound(project_id)
        return Project.from_row(row)

    def insert(self, fields):
        payload = build_payload(fields)
        try:
            row = self.backend.insert_project(payload)
        except BackendError as e:
            LoggingService.error('projects', 'Insert failed', {'error': e.message, 'title': payload['title']})
            raise RepositoryError(e.message) from e
        project = Project.from_row(row)
        LoggingService.log_user_action('projects', f"Created project: {project.title}", details={'id': project.id})
        return project

    def update(self, project_id, fields):
        """Overwrite every editable column of one project"""
        payload = build_payload(fields)
        try:
            row = self.backend.update_project(project_id, payload)
        except BackendError as e:
            LoggingService.error('projects', f"Update failed for {project_id}", {'error': e.message})
            raise RepositoryError(e.message) from e

        if row is None:
            row = dict(payload, id=project_id)
        LoggingService.log_user_action('projects', f"Updated project: {payload['title']}", details={'id': project_id})
        return Project.from_row(row)

    def upload_image(self, file):
        """Store an uploaded werkzeug FileStorage and return its public URL"""
        data = file.read()
        return storage.upload_file(self.backend, data, file.filename, content_type=file.mimetype or None)

    def delete_image(self, url):
        return storage.delete_file(self.backend, url)

    def delete_record(self, project_id):
        try:
            self.backend.delete_project(project_id)
        except BackendError as e:
            LoggingService.error('projects', f"Delete failed for {project_id}", {'error': e.message})
            raise RepositoryError(e.message) from e
        LoggingService.log_user_action('projects', 'Deleted project', details={'id': project_id})

    def delete_project(self, project):
        """Remove the project's image (best-effort) and then its record.

        Returns whether the image removal succeeded; the record delete
        happens either way and raises RepositoryError on failure.
        """
        image_removed = False
        if project.image:
            image_removed = self.delete_image(project.image)
            if not image_removed:
                logger.warning(f"Image for project {project.id} was not removed, deleting record anyway")
        self.delete_record(project.id)
        return image_removed


def get_repository():
    return ProjectRepository(get_backend())
