import os
import uuid
from contextlib import contextmanager

from flask import current_app
from werkzeug.utils import secure_filename

IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'webp'}
LOGO_EXTENSIONS = IMAGE_EXTENSIONS | {'svg'}
DOCUMENT_EXTENSIONS = {'pdf', 'doc', 'docx'}


class UploadError(ValueError):
    pass


def allowed_file(filename, allowed_extensions=IMAGE_EXTENSIONS):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed_extensions


def collection_dir(collection):
    upload_folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    path = os.path.join(upload_folder, collection)
    os.makedirs(path, exist_ok=True)
    return path


def save_file(file, collection, prefix, allowed_extensions=IMAGE_EXTENSIONS, kind='image'):
    """
    Store an uploaded file under UPLOAD_FOLDER/<collection>/ and return the
    relative URL path that gets persisted on the row.
    """
    filename = secure_filename(file.filename or '')
    if not filename or not allowed_file(filename, allowed_extensions):
        allowed = ', '.join(sorted(ext.upper() for ext in allowed_extensions))
        raise UploadError(f"Only {kind} files ({allowed}) are allowed")

    ext = filename.rsplit('.', 1)[1].lower()
    unique_filename = f"{prefix}-{uuid.uuid4().hex}.{ext}"

    file.save(os.path.join(collection_dir(collection), unique_filename))

    return f"/uploads/{collection}/{unique_filename}"


def pop_upload(files, field, collection, prefix, allowed_extensions=IMAGE_EXTENSIONS, kind='image'):
    """Save ``files[field]`` when the client actually attached something."""
    file = files.get(field)
    if file is None or not file.filename:
        return None
    return save_file(file, collection, prefix, allowed_extensions, kind)


def delete_file(file_url):
    """
    Deletes a stored upload given its relative URL.
    """
    if not file_url or not file_url.startswith('/uploads/'):
        return False

    relative = file_url[len('/uploads/'):]
    upload_folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    file_path = os.path.join(upload_folder, relative)

    if os.path.exists(file_path):
        try:
            os.remove(file_path)
            return True
        except OSError as e:
            current_app.logger.error(f"Failed to delete file {file_path}: {e}")
            return False
    return False


@contextmanager
def discard_on_failure(*file_urls):
    """
    Remove freshly saved uploads when the write that references them fails.
    """
    try:
        yield
    except Exception:
        for file_url in file_urls:
            delete_file(file_url)
        raise
