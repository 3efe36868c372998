"""
Project record as stored in the Supabase ``projects`` table.
"""

from dataclasses import dataclass, field
from urllib.parse import urlparse
from typing import List, Optional

# Columns the admin writes; id and created_at are assigned by the server
EDITABLE_FIELDS = ('title', 'category', 'technologies', 'description',
                   'longDescription', 'link', 'image')
LABEL_FIELDS = ('category', 'technologies')
LINK_SCHEMES = ('http', 'https')


def split_labels(value):
    """Split comma-entered labels: "A, B ,C" -> ["A", "B", "C"].

    Elements are trimmed and empty elements dropped.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(',')
    return [str(item).strip() for item in items if str(item).strip()]


def safe_link(value):
    """Keep only http(s) URLs; anything else (javascript:, data:) becomes ''"""
    link = str(value or '').strip()
    if urlparse(link).scheme.lower() not in LINK_SCHEMES:
        return ''
    return link


def join_labels(labels):
    return ', '.join(labels or [])


@dataclass
class Project:
    id: Optional[str] = None
    title: str = ''
    category: List[str] = field(default_factory=list)
    technologies: List[str] = field(default_factory=list)
    description: str = ''
    long_description: str = ''
    link: str = ''
    image: str = ''
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row.get('id'),
            title=row.get('title') or '',
            category=list(row.get('category') or []),
            technologies=list(row.get('technologies') or []),
            description=row.get('description') or '',
            long_description=row.get('longDescription') or '',
            link=row.get('link') or '',
            image=row.get('image') or '',
            created_at=row.get('created_at'),
        )

    @property
    def link_url(self):
        """Link safe to put in an href; rows written elsewhere may hold anything"""
        return safe_link(self.link)

    def to_dict(self):
        """JSON shape served by the API"""
        return {
            'id': self.id,
            'title': self.title,
            'category': list(self.category),
            'technologies': list(self.technologies),
            'description': self.description,
            'longDescription': self.long_description,
            'link': self.link,
            'image': self.image,
            'created_at': self.created_at,
        }


def build_payload(fields):
    """Full set of editable columns for an insert or update.

    Labels are normalized here, immediately before the write, and links
    that are not http(s) are dropped.
    """
    payload = {}
    for name in EDITABLE_FIELDS:
        value = fields.get(name)
        if name in LABEL_FIELDS:
            payload[name] = split_labels(value)
        elif name == 'link':
            payload[name] = safe_link(value)
        elif value is None:
            payload[name] = ''
        elif isinstance(value, str):
            payload[name] = value.strip()
        else:
            payload[name] = value
    return payload
