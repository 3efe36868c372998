"""
Repository, model and storage tests
===================================

Exercises the project repository against the in-memory backend, plus the
label normalization and image filename rules it relies on.
"""

import io

import pytest
from werkzeug.datastructures import FileStorage

from folio.core import storage
from folio.core.errors import ProjectNotFound, RepositoryError, StorageError
from folio.modules.projects.models import Project, build_payload, join_labels, safe_link, split_labels
from folio.modules.projects.repository import ProjectRepository

from conftest import PUBLIC_PREFIX


@pytest.fixture
def repository(app, backend):
    with app.app_context():
        yield ProjectRepository(backend)


# ---------------------------------------------------------------------------
# 1. Label normalization
# ---------------------------------------------------------------------------

def test_split_labels_trims_each_element():
    assert split_labels("A, B ,C") == ["A", "B", "C"]


def test_split_labels_drops_empty_elements():
    assert split_labels("Laravel,, ,NextJs,") == ["Laravel", "NextJs"]
    assert split_labels("") == []
    assert split_labels(None) == []


def test_split_labels_accepts_lists():
    assert split_labels([" Flask ", "", "Supabase"]) == ["Flask", "Supabase"]


def test_join_labels_round_trips_for_edit_prefill():
    assert join_labels(["Laravel", "UI/UX"]) == "Laravel, UI/UX"
    assert join_labels([]) == ""


def test_build_payload_covers_every_editable_column():
    payload = build_payload({
        "title": "  Portfolio  ",
        "category": "NextJs, UI/UX",
        "technologies": "React,Tailwind",
        "description": "Short",
        "longDescription": "Long",
    })

    assert payload == {
        "title": "Portfolio",
        "category": ["NextJs", "UI/UX"],
        "technologies": ["React", "Tailwind"],
        "description": "Short",
        "longDescription": "Long",
        "link": "",
        "image": "",
    }


def test_build_payload_drops_non_http_links():
    assert build_payload({"link": "javascript:alert(1)"})["link"] == ""
    assert build_payload({"link": " JavaScript:alert(1)"})["link"] == ""
    assert build_payload({"link": " https://example.com/app "})["link"] == "https://example.com/app"


def test_safe_link_schemes():
    assert safe_link("http://example.com") == "http://example.com"
    assert safe_link("data:text/html,hi") == ""
    assert safe_link("example.com") == "", "Links without a scheme are not rendered"
    assert safe_link(None) == ""


def test_project_from_row_maps_long_description():
    project = Project.from_row({"id": 3, "title": "T", "longDescription": "Body", "category": None})

    assert project.long_description == "Body"
    assert project.category == []
    assert project.to_dict()["longDescription"] == "Body"


# ---------------------------------------------------------------------------
# 2. Reads
# ---------------------------------------------------------------------------

def test_list_returns_newest_first(repository, backend):
    backend.add_project(title="Old", created_at="2023-01-01T00:00:00+00:00")
    backend.add_project(title="New", created_at="2024-06-01T00:00:00+00:00")
    backend.add_project(title="Middle", created_at="2023-09-01T00:00:00+00:00")

    titles = [p.title for p in repository.list()]
    assert titles == ["New", "Middle", "Old"]


def test_list_failure_raises_repository_error(repository, backend):
    backend.fail("select_projects", "relation does not exist")

    with pytest.raises(RepositoryError) as excinfo:
        repository.list()
    assert excinfo.value.message == "relation does not exist"


def test_get_by_id_distinguishes_missing_from_failure(repository, backend):
    backend.add_project(title="Only")

    assert repository.get_by_id("1").title == "Only"

    with pytest.raises(ProjectNotFound):
        repository.get_by_id("999")

    backend.fail("select_project", "timeout")
    with pytest.raises(RepositoryError) as excinfo:
        repository.get_by_id("1")
    assert not isinstance(excinfo.value, ProjectNotFound)


# ---------------------------------------------------------------------------
# 3. Writes
# ---------------------------------------------------------------------------

def test_insert_normalizes_labels_before_write(repository, backend):
    project = repository.insert({
        "title": "Shop", "category": "Laravel , ", "technologies": "PHP, MySQL",
        "description": "d", "longDescription": "ld", "image": PUBLIC_PREFIX + "1.png",
    })

    written = backend.called("insert_project")[0][1]
    assert written["category"] == ["Laravel"]
    assert written["technologies"] == ["PHP", "MySQL"]
    assert project.id is not None
    assert project.image == PUBLIC_PREFIX + "1.png"


def test_update_overwrites_all_editable_columns(repository, backend):
    backend.add_project(title="Before", link="https://old.example.com", image="a.png")

    project = repository.update("1", {
        "title": "After", "category": "UI/UX", "technologies": "Figma",
        "description": "d", "longDescription": "ld", "link": "", "image": "a.png",
    })

    assert project.title == "After"
    assert backend.rows[0]["link"] == ""
    assert backend.rows[0]["category"] == ["UI/UX"]


def test_insert_failure_raises_repository_error(repository, backend):
    backend.fail("insert_project", "duplicate key")

    with pytest.raises(RepositoryError):
        repository.insert({"title": "x"})


# ---------------------------------------------------------------------------
# 4. Image storage
# ---------------------------------------------------------------------------

def test_generate_image_filename_uses_millis_and_extension():
    assert storage.generate_image_filename("shot.final.PNG", now=1699000000.5) == "1699000000500.PNG"


def test_filename_from_url_takes_last_path_segment():
    assert storage.filename_from_url(PUBLIC_PREFIX + "169900000.png") == "169900000.png"
    assert storage.filename_from_url(PUBLIC_PREFIX + "169900000.png?download=1") == "169900000.png"
    assert storage.filename_from_url("") == ""


def test_upload_image_returns_public_url(repository, backend):
    upload = FileStorage(stream=io.BytesIO(b"png-bytes"), filename="cover.png", content_type="image/png")

    url = repository.upload_image(upload)

    path = backend.called("upload_object")[0][1]
    assert url == PUBLIC_PREFIX + path
    assert path.endswith(".png")
    assert backend.objects[path] == b"png-bytes"


def test_upload_failure_raises_storage_error(repository, backend):
    backend.fail("upload_object", "Payload too large")
    upload = FileStorage(stream=io.BytesIO(b"x"), filename="big.jpg", content_type="image/jpeg")

    with pytest.raises(StorageError) as excinfo:
        repository.upload_image(upload)
    assert excinfo.value.message == "Payload too large"


# ---------------------------------------------------------------------------
# 5. Delete: image first (best-effort), then the record
# ---------------------------------------------------------------------------

def test_delete_removes_image_then_record(repository, backend):
    backend.add_project(title="Doomed", image=PUBLIC_PREFIX + "169900000.png")
    project = repository.get_by_id("1")

    image_removed = repository.delete_project(project)

    assert image_removed is True
    assert backend.called("remove_objects") == [("remove_objects", ["169900000.png"])]
    assert backend.called("delete_project") == [("delete_project", "1")]
    methods = [call[0] for call in backend.calls]
    assert methods.index("remove_objects") < methods.index("delete_project")
    assert backend.rows == []


def test_delete_proceeds_when_image_removal_fails(repository, backend):
    backend.add_project(title="Doomed", image=PUBLIC_PREFIX + "169900000.png")
    backend.fail("remove_objects", "Object not found")
    project = repository.get_by_id("1")

    image_removed = repository.delete_project(project)

    assert image_removed is False
    assert backend.called("delete_project") == [("delete_project", "1")]
    assert backend.rows == []


def test_delete_without_image_skips_storage(repository, backend):
    backend.add_project(title="No image")

    repository.delete_project(repository.get_by_id("1"))

    assert backend.called("remove_objects") == []
    assert backend.rows == []


def test_delete_record_failure_raises(repository, backend):
    backend.add_project(title="Sticky")
    backend.fail("delete_project", "permission denied")

    with pytest.raises(RepositoryError):
        repository.delete_project(repository.get_by_id("1"))
    assert len(backend.rows) == 1
