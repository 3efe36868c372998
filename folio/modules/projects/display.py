"""
Project list presentation: search/category filtering, grid or list
rendering, the detail overlay and display-only date formatting.
"""

from datetime import datetime
from enum import Enum

MONTHS = {
    'en': ['January', 'February', 'March', 'April', 'May', 'June', 'July',
           'August', 'September', 'October', 'November', 'December'],
    'id': ['Januari', 'Februari', 'Maret', 'April', 'Mei', 'Juni', 'Juli',
           'Agustus', 'September', 'Oktober', 'November', 'Desember'],
}


class RenderMode(Enum):
    GRID = 'grid'
    LIST = 'list'

    @classmethod
    def from_value(cls, value):
        try:
            return cls(value)
        except ValueError:
            return cls.GRID


def filter_projects(projects, search_term='', category=''):
    """Title substring match (case-insensitive) AND exact category membership"""
    term = (search_term or '').lower()
    result = []
    for project in projects:
        if term not in project.title.lower():
            continue
        if category and category not in project.category:
            continue
        result.append(project)
    return result


def format_display_date(value, locale='en'):
    """'2024-03-05T10:00:00+00:00' -> 'March 5, 2024' ('5 Maret 2024' for id).

    Unparseable values are returned unchanged.
    """
    if not value:
        return ''
    try:
        date = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return value

    months = MONTHS.get(locale, MONTHS['en'])
    month = months[date.month - 1]
    if locale == 'id':
        return f"{date.day} {month} {date.year}"
    return f"{month} {date.day}, {date.year}"


class ProjectListView:
    """View state of one list page, read from the query string"""

    def __init__(self, projects, search_term='', category='', mode=RenderMode.GRID, selected_id=None):
        self.projects = projects
        self.search_term = search_term
        self.category = category
        self.mode = mode
        self.selected_id = selected_id

    @classmethod
    def from_args(cls, projects, args):
        return cls(
            projects,
            search_term=args.get('q', '').strip(),
            category=args.get('category', ''),
            mode=RenderMode.from_value(args.get('view', RenderMode.GRID.value)),
            selected_id=args.get('selected') or None,
        )

    @property
    def filtered(self):
        return filter_projects(self.projects, self.search_term, self.category)

    @property
    def selected(self):
        if self.selected_id is None:
            return None
        for project in self.projects:
            if str(project.id) == str(self.selected_id):
                return project
        return None

    def query_args(self, **overrides):
        """Current state as url_for kwargs, with overrides; None drops a key"""
        args = {
            'q': self.search_term or None,
            'category': self.category or None,
            'view': self.mode.value,
        }
        args.update(overrides)
        return {key: value for key, value in args.items() if value}
