import io
import os

import pytest
from PIL import Image

from inkwell.utils import cloud_storage


def _png_bytes(size=(4, 4)):
    buffer = io.BytesIO()
    Image.new('RGB', size, color=(200, 30, 30)).save(buffer, format='PNG')
    buffer.seek(0)
    return buffer


@pytest.fixture()
def upload_dir(app, tmp_path):
    app.config['UPLOAD_FOLDER'] = str(tmp_path)
    return tmp_path


def _upload(client, headers, data, filename='photo.png', mimetype='image/png'):
    return client.post('/api/upload/image', headers=headers,
                       data={'image': (data, filename, mimetype)},
                       content_type='multipart/form-data')


def test_upload_requires_admin(client, user_headers, upload_dir):
    assert _upload(client, {}, _png_bytes()).status_code == 401
    assert _upload(client, user_headers, _png_bytes()).status_code == 403


def test_upload_and_serve_locally(client, admin_headers, upload_dir):
    resp = _upload(client, admin_headers, _png_bytes())
    assert resp.status_code == 200

    data = resp.get_json()
    assert data['message'] == 'Image uploaded successfully'
    assert data['filename'].endswith('.png')
    assert data['url'].endswith(f"/api/upload/files/{data['filename']}")
    assert os.path.exists(upload_dir / data['filename'])

    served = client.get(f"/api/upload/files/{data['filename']}")
    assert served.status_code == 200
    assert served.data.startswith(b'\x89PNG')
    served.close()

    deleted = client.delete(f"/api/upload/image/{data['filename']}", headers=admin_headers)
    assert deleted.status_code == 200
    assert not os.path.exists(upload_dir / data['filename'])

    again = client.delete(f"/api/upload/image/{data['filename']}", headers=admin_headers)
    assert again.status_code == 404
    assert again.get_json() == {'error': 'Image not found'}


def test_upload_without_file(client, admin_headers, upload_dir):
    resp = client.post('/api/upload/image', headers=admin_headers, data={},
                       content_type='multipart/form-data')
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'No file uploaded'}


def test_upload_rejects_disallowed_mimetype(client, admin_headers, upload_dir):
    resp = _upload(client, admin_headers, io.BytesIO(b'%PDF-1.4'), 'doc.pdf', 'application/pdf')
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Invalid file type'}


def test_upload_rejects_fake_image(client, admin_headers, upload_dir):
    resp = _upload(client, admin_headers, io.BytesIO(b'not really a png'))
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Invalid file type'}


def test_upload_rejects_mismatched_format(client, admin_headers, upload_dir):
    resp = _upload(client, admin_headers, _png_bytes(), 'photo.jpg', 'image/jpeg')
    assert resp.status_code == 400


def test_upload_too_large(client, app, admin_headers, upload_dir):
    app.config['MAX_FILE_SIZE'] = 10
    resp = _upload(client, admin_headers, _png_bytes())
    assert resp.status_code == 413
    assert resp.get_json()['error'].startswith('File too large')


def test_upload_to_cloud(client, admin_headers, upload_dir, monkeypatch):
    calls = {}

    def fake_upload(stream, public_id):
        calls['public_id'] = public_id
        return {'url': f'https://res.cloudinary.com/demo/{public_id}.png', 'public_id': public_id}

    monkeypatch.setattr(cloud_storage, 'is_cloud_storage_enabled', lambda: True)
    monkeypatch.setattr(cloud_storage, 'upload_to_cloud', fake_upload)

    data = _upload(client, admin_headers, _png_bytes()).get_json()
    assert data['url'] == f"https://res.cloudinary.com/demo/{calls['public_id']}.png"
    assert data['filename'] == f"{calls['public_id']}.png"
    assert list(upload_dir.iterdir()) == []


def test_cloud_upload_failure(client, admin_headers, upload_dir, monkeypatch):
    monkeypatch.setattr(cloud_storage, 'is_cloud_storage_enabled', lambda: True)
    monkeypatch.setattr(cloud_storage, 'upload_to_cloud', lambda stream, public_id: None)

    resp = _upload(client, admin_headers, _png_bytes())
    assert resp.status_code == 500
    assert resp.get_json() == {'error': 'Failed to upload image'}
