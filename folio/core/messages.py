"""
User-facing messages in English and Indonesian.
"""

from .config import get_config_value

MESSAGES = {
    'en': {
        'login_required_fields': 'Email and password are required',
        'login_too_many_attempts': 'Too many attempts. Please try again later.',
        'login_attempts_left': 'Attempts remaining: {count}',
        'login_invalid_credentials': 'Incorrect email or password',
        'login_email_not_confirmed': 'Email has not been confirmed',
        'login_unexpected': 'Something went wrong while signing in',
        'logout_success': 'You have been logged out',
        'logout_error': 'Error during logout',
        'form_missing_fields': 'Please complete the following fields: {fields}',
        'upload_failed': 'Failed to upload image: {error}',
        'create_failed': 'Failed to add project: {error}',
        'create_success': 'Project added successfully!',
        'update_failed': 'Failed to update project: {error}',
        'update_success': 'Project updated successfully!',
        'project_not_found': 'Project not found',
        'load_failed': 'Error: {error}',
        'delete_success': 'Project successfully deleted',
        'delete_failed': 'Failed to delete project: {error}',
        'delete_not_confirmed': 'Deletion cancelled',
        'unexpected_error': 'An unexpected error occurred',
    },
    'id': {
        'login_required_fields': 'Email dan password harus diisi',
        'login_too_many_attempts': 'Terlalu banyak percobaan. Silakan coba lagi nanti.',
        'login_attempts_left': 'Sisa percobaan: {count}',
        'login_invalid_credentials': 'Email atau password salah',
        'login_email_not_confirmed': 'Email belum dikonfirmasi',
        'login_unexpected': 'Terjadi kesalahan saat login',
        'logout_success': 'Anda telah keluar',
        'logout_error': 'Terjadi kesalahan saat logout',
        'form_missing_fields': 'Mohon lengkapi field berikut: {fields}',
        'upload_failed': 'Gagal upload gambar: {error}',
        'create_failed': 'Gagal menambahkan proyek: {error}',
        'create_success': 'Proyek berhasil ditambahkan!',
        'update_failed': 'Gagal memperbarui proyek: {error}',
        'update_success': 'Proyek berhasil diperbarui!',
        'project_not_found': 'Proyek tidak ditemukan',
        'load_failed': 'Error: {error}',
        'delete_success': 'Proyek berhasil dihapus',
        'delete_failed': 'Gagal menghapus proyek: {error}',
        'delete_not_confirmed': 'Penghapusan dibatalkan',
        'unexpected_error': 'Terjadi kesalahan yang tidak diharapkan',
    },
}

FIELD_LABELS = {
    'en': {
        'image': 'Project Image',
        'title': 'Project Title',
        'category': 'Category',
        'technologies': 'Technologies',
        'description': 'Short Description',
        'longDescription': 'Full Description',
        'link': 'Project Link',
    },
    'id': {
        'image': 'Gambar Proyek',
        'title': 'Judul Proyek',
        'category': 'Kategori',
        'technologies': 'Teknologi',
        'description': 'Deskripsi Singkat',
        'longDescription': 'Deskripsi Lengkap',
        'link': 'Link Proyek',
    },
}


def current_locale():
    locale = get_config_value('LOCALE', 'en')
    return locale if locale in MESSAGES else 'en'


def message(key, **kwargs):
    text = MESSAGES[current_locale()][key]
    return text.format(**kwargs) if kwargs else text


def field_label(name):
    return FIELD_LABELS[current_locale()].get(name, name)
