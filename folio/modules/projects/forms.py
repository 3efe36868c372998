"""
Project Form
============

One form for both create and edit. An edit form carries the id and the
record it was loaded from; a create form has neither.
"""

from folio.core.errors import FormValidationError
from .models import join_labels

TEXT_FIELDS = ('title', 'category', 'technologies', 'description', 'longDescription', 'link')
REQUIRED_FIELDS = ('title', 'category', 'technologies', 'description', 'longDescription')


class ProjectForm:

    def __init__(self, values=None, image_file=None, initial=None, project_id=None):
        values = values or {}
        self.values = {name: values.get(name, '') or '' for name in TEXT_FIELDS}
        self.image_file = image_file if image_file is not None and image_file.filename else None
        self.initial = initial
        self.project_id = project_id

    @classmethod
    def for_create(cls):
        return cls()

    @classmethod
    def for_edit(cls, project):
        """Prefill from a stored project, labels joined back into comma text"""
        values = {
            'title': project.title,
            'category': join_labels(project.category),
            'technologies': join_labels(project.technologies),
            'description': project.description,
            'longDescription': project.long_description,
            'link': project.link,
        }
        return cls(values, initial=project, project_id=project.id)

    @classmethod
    def from_request(cls, form, files, initial=None, project_id=None):
        return cls(
            {name: form.get(name, '') for name in TEXT_FIELDS},
            image_file=files.get('image'),
            initial=initial,
            project_id=project_id,
        )

    @property
    def is_edit(self):
        return self.project_id is not None

    @property
    def existing_image(self):
        return self.initial.image if self.initial is not None else ''

    def missing_fields(self):
        """Names of required inputs left empty.

        The image file is only required when creating.
        """
        missing = []
        if not self.is_edit and self.image_file is None:
            missing.append('image')
        for name in REQUIRED_FIELDS:
            if not self.values[name].strip():
                missing.append(name)
        return missing

    def validate(self):
        missing = self.missing_fields()
        if missing:
            raise FormValidationError(missing)

    def progress(self):
        """Percentage of the create form's required inputs that are filled"""
        filled = [self.image_file is not None or bool(self.existing_image)]
        filled += [bool(self.values[name].strip()) for name in REQUIRED_FIELDS]
        return round(100 * sum(filled) / len(filled))

    def to_fields(self, image_url):
        fields = dict(self.values)
        fields['image'] = image_url
        return fields


def submit_project_form(repository, form):
    """Run one create or edit submission.

    1. check required inputs (FormValidationError, nothing uploaded)
    2. upload the newly chosen image, if any (StorageError aborts here)
    3. insert or overwrite the record with labels normalized

    Edit without a new file keeps the previously stored image URL. Nothing
    is written unless every earlier step succeeded.
    """
    form.validate()

    image_url = form.existing_image
    if form.image_file is not None:
        image_url = repository.upload_image(form.image_file)

    fields = form.to_fields(image_url)
    if form.is_edit:
        return repository.update(form.project_id, fields)
    return repository.insert(fields)
