import base64
import hashlib
from urllib.parse import quote

# Characters left alone by JavaScript's encodeURIComponent, which is what B2
# expects for file names and file info headers.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def construct_url(base: str, endpoint: str) -> str:
  """Construct a URL from a base URL and an API endpoint.

  Args:
    base: The root address, e.g. https://api.backblazeb2.com/b2api/v3.
    endpoint: The path of the endpoint, e.g. /b2_get_upload_url.

  Returns:
    A URL based on the info.
  """
  return ''.join((base.rstrip('/'), endpoint))


def sha1(contents: bytes) -> str:
  """
  Args:
    contents: The bytes to hash.

  Returns:
    The sha1 hash of the contents.
  """
  return hashlib.sha1(contents).hexdigest()


def basic_credentials(application_key_id: str, application_key: str) -> str:
  """Encode a key pair for the `Authorization: Basic` header.

  Args:
    application_key_id: The id of the application key.
    application_key: The secret part of the application key.

  Returns:
    The base64 encoded `id:key` string.
  """
  pair = '{0}:{1}'.format(application_key_id, application_key)
  return base64.b64encode(pair.encode('utf-8')).decode('ascii')


def encode_header_value(value: str) -> str:
  """Percent-encode a value the way B2 expects in X-Bz-* headers."""
  return quote(value, safe=_URI_COMPONENT_SAFE)


def encode_file_name(file_name: str) -> str:
  """Percent-encode each segment of a file name, keeping the slashes.

  Args:
    file_name: The name of the file in the bucket, e.g. photos/a b.jpg.

  Returns:
    The encoded name, e.g. photos/a%20b.jpg.
  """
  return '/'.join(encode_header_value(part) for part in file_name.split('/'))
