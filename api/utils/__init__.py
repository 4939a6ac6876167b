"""Utility modules."""
from api.utils.data_uri import parse_data_uri, to_data_uri
from api.utils.file_utils import read_upload, upload_name
from api.utils.json_utils import json_dump
from api.utils.time_utils import utc_now
from api.utils.validation import validate_id

__all__ = [
    "parse_data_uri",
    "to_data_uri",
    "read_upload",
    "upload_name",
    "json_dump",
    "utc_now",
    "validate_id",
]
