"""Helpers de servidor para uploads multipart e corpos JSON."""

from payload_toolkit.api.downloads import download_static_file
from payload_toolkit.api.json_io import error_json, read_json, write_json
from payload_toolkit.api.schemas.json_schema import ErrorEnvelope
from payload_toolkit.core.policies import JSONCodecPolicy, UploadPolicy
from payload_toolkit.core.text import slugify
from payload_toolkit.infrastructure.http.remote_json import push_json_to_remote
from payload_toolkit.infrastructure.security.random_string import random_string
from payload_toolkit.infrastructure.sniffing.content_type import detect_content_type
from payload_toolkit.infrastructure.storage.file_storage import UploadedFile
from payload_toolkit.infrastructure.storage.local_file_storage import create_dir_if_not_exists
from payload_toolkit.main import create_app
from payload_toolkit.services.json_codec import decode_json
from payload_toolkit.services.upload_service import UploadService

__all__ = [
    "ErrorEnvelope",
    "JSONCodecPolicy",
    "UploadPolicy",
    "UploadService",
    "UploadedFile",
    "create_app",
    "create_dir_if_not_exists",
    "decode_json",
    "detect_content_type",
    "download_static_file",
    "error_json",
    "push_json_to_remote",
    "random_string",
    "read_json",
    "slugify",
    "write_json",
]
