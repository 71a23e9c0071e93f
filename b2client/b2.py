import json
import logging
from requests import Response, request
from typing import Callable, Dict, Optional, Union

from b2client import constants, utils
from b2client.errors import ApiError, AuthorizationError, ValidationError
from b2client.models import (Account, AuthorizeAccountResponse,
                             ListFileNamesResponse, StorageApiInfo,
                             UploadFileResponse, UploadUrlResponse)

logger = logging.getLogger(__name__)

AUTHORIZE_ACCOUNT = 'b2_authorize_account'
GET_UPLOAD_URL = 'b2_get_upload_url'
LIST_FILE_NAMES = 'b2_list_file_names'
UPLOAD_FILE = 'b2_upload_file'


class B2:
  """This module is a wrapper around the Backblaze B2 API to upload files to a
  bucket and build links to download them again."""

  def __init__(self,
               user_agent: str = None,
               base_api: str = constants.B2_API_HOST,
               hasher: Callable[[bytes], str] = utils.sha1,
               auto_retry_on_unauthorized: bool = True,
               timeout: float = None):
    """Set up a client. Nothing is sent until `authorize_account` is called.

    Args:
      user_agent: The User-Agent sent with every request, e.g. 'my-app/1.0'.
                  If not provided, we try to read from the ENV variable
                  `B2_USER_AGENT`.
      base_api: The root of the API used to authorize the account.
      hasher: Function computing the 40 character hex SHA-1 of file contents.
      auto_retry_on_unauthorized: Whether to authorize again and resend a
                                  request once when it is answered with a 401.
                                  Authorization calls are never retried.
      timeout: Seconds to wait for the server, passed on to requests.
    """
    self.user_agent = user_agent or constants.B2_USER_AGENT
    if not self.user_agent:
      raise ValidationError('A User-Agent is required to talk to B2.')

    self.base_api = base_api
    self.hasher = hasher
    self.auto_retry_on_unauthorized = auto_retry_on_unauthorized
    self.timeout = timeout

    # Base64 of `key_id:key`, kept to authorize again on a 401
    self._account_credentials = None
    self._authorization = None

  @property
  def authorization(self) -> Optional[AuthorizeAccountResponse]:
    """
    Returns:
      The result of the last successful `authorize_account` call, if any.
    """
    return self._authorization

  @property
  def authorized(self) -> bool:
    """
    Returns:
      Whether we have already authenticated and received a token.
    """
    return bool(self._authorization)

  @property
  def storage_api(self) -> StorageApiInfo:
    """
    Returns:
      The `apiInfo.storageApi` block of the authorization.
    """
    self._check_authorization()
    return self._authorization['apiInfo']['storageApi']

  def _check_authorization(self, operation: str = None):
    """Raise an AuthorizationError unless authorize_account succeeded."""
    if not self.authorized:
      raise AuthorizationError(
          'Client is not authorized, call authorize_account() first. '
          'Operation: {0}'.format(operation))

  @staticmethod
  def _operation_url(host: str, operation: str) -> str:
    base = utils.construct_url(host, constants.B2_API_VERSION)
    return utils.construct_url(base, '/' + operation)

  @staticmethod
  def _error(response: Response, url: str) -> ApiError:
    """Turn a failed response into an ApiError.

    B2 answers errors with a JSON body of the form
    {"status": 400, "code": "bad_request", "message": "..."}.
    """
    try:
      data = response.json()
    except ValueError:
      return ApiError(response.status_code, None, response.text, url,
                      response.text)
    if not isinstance(data, dict):
      return ApiError(response.status_code, None, response.text, url,
                      response.text)
    return ApiError(response.status_code, data.get('code'),
                    data.get('message', response.text), url, response.text)

  def _call(self,
            operation: str,
            url: str,
            headers: Dict = None,
            data: Union[str, bytes] = None) -> Dict:
    """Makes a B2 API call and catches any errors.

    Args:
      operation: The name of the API operation, e.g. b2_get_upload_url.
      url: The full URL to send the request to.
      headers: HTTP headers to send.
      data: The body of the request. Requests with a body are sent as POST,
            the others as GET.

    Returns:
      The decoded JSON answer, if successful.
    """
    headers = dict(headers or {})
    headers['User-Agent'] = self.user_agent
    if not any(key.lower() == 'content-type' for key in headers):
      headers['Content-Type'] = constants.JSON_CONTENT_TYPE
    method = 'GET' if data is None else 'POST'

    logger.debug('%s %s', method, operation)
    response = request(method,
                       url,
                       headers=headers,
                       data=data,
                       timeout=self.timeout)

    if (response.status_code == 401 and self.auto_retry_on_unauthorized and
        operation != AUTHORIZE_ACCOUNT):
      logger.debug('Got 401 from %s, authorizing again before one retry',
                   operation)
      self._authorize()
      headers['Authorization'] = self._authorization['authorizationToken']
      response = request(method,
                         url,
                         headers=headers,
                         data=data,
                         timeout=self.timeout)

    if not 200 <= response.status_code < 300:
      raise self._error(response, url)

    return response.json()

  def _authorize(self, credentials: str = None):
    """Authorize the client.

    The credentials are only cached once the server accepted them.

    Args:
      credentials: Base64 of `key_id:key`. Defaults to the cached credentials.
    """
    credentials = credentials or self._account_credentials
    headers = {'Authorization': 'Basic ' + credentials}
    self._authorization = self._call(
        AUTHORIZE_ACCOUNT,
        self._operation_url(self.base_api, AUTHORIZE_ACCOUNT),
        headers=headers)
    self._account_credentials = credentials

  def authorize_account(self,
                        account: Account = None) -> AuthorizeAccountResponse:
    """Get authorization for an account.

    The result is kept by the client and used for every later call.

    Args:
      account: The application key to log in with. If not provided, we try
               to read from the ENV variables `B2_APPLICATION_KEY_ID` and
               `B2_APPLICATION_KEY`.

    Returns:
      The authorization data.
    """
    if account is None:
      if not (constants.B2_APPLICATION_KEY_ID and constants.B2_APPLICATION_KEY):
        raise ValidationError('No key id or key for B2 account.')
      account = Account(constants.B2_APPLICATION_KEY_ID,
                        constants.B2_APPLICATION_KEY)

    self._authorize(
        utils.basic_credentials(account.application_key_id,
                                account.application_key))
    return self._authorization

  def get_upload_url(self, bucket_id: str) -> UploadUrlResponse:
    """In order to upload a file, we first request an upload URL.

    Args:
      bucket_id: The bucket to upload to.

    Returns:
      The upload URL with the token that goes with it.
    """
    self._check_authorization(GET_UPLOAD_URL)
    headers = {'Authorization': self._authorization['authorizationToken']}
    body = json.dumps({'bucketId': bucket_id})
    return self._call(GET_UPLOAD_URL,
                      self._operation_url(self.storage_api['apiUrl'],
                                          GET_UPLOAD_URL),
                      headers=headers,
                      data=body)

  def upload_file(self,
                  bucket_id: str,
                  file_name: str,
                  contents: bytes,
                  file_hash: str = None,
                  content_type: str = None,
                  upload_url: UploadUrlResponse = None,
                  content_disposition: str = None) -> UploadFileResponse:
    """Upload a file to a given bucket.

    A fresh upload URL is requested unless one is given.

    Args:
      bucket_id: The bucket to put the file in.
      file_name: The name of the file in the object store.
      contents: The file contents.
      file_hash: SHA-1 of the contents. Computed with the client's hasher if
                 not provided.
      content_type: The value of the Content-Type header to send.
      upload_url: The result of an earlier `get_upload_url` call.
      content_disposition: Stored as the b2-content-disposition file info and
                           served back on download.

    Returns:
      Information about the created file.
    """
    self._check_authorization(UPLOAD_FILE)

    file_hash = file_hash if file_hash is not None else self.hasher(contents)
    if len(file_hash) != constants.SHA1_HEX_LENGTH:
      raise ValidationError(
          'Invalid file hash length {0}, a SHA-1 hash has {1} hex characters.'
          .format(len(file_hash), constants.SHA1_HEX_LENGTH))

    if upload_url is None:
      upload_url = self.get_upload_url(bucket_id)

    headers = {
        'Authorization': upload_url['authorizationToken'],
        'X-Bz-File-Name': utils.encode_file_name(file_name),
        'Content-Type': content_type or constants.B2_AUTO_CONTENT_TYPE,
        'Content-Length': str(len(contents)),
        'X-Bz-Content-Sha1': file_hash
    }
    if content_disposition:
      headers['X-Bz-Info-b2-content-disposition'] = utils.encode_header_value(
          content_disposition)

    return self._call(UPLOAD_FILE,
                      upload_url['uploadUrl'],
                      headers=headers,
                      data=contents)

  def list_file_names(self,
                      bucket_id: str,
                      start_file_name: str = None,
                      max_file_count: int = None,
                      prefix: str = None,
                      delimiter: str = None) -> ListFileNamesResponse:
    """List the names of the files in a bucket.

    Args:
      bucket_id: The bucket to search.
      start_file_name: The first file name to return.
      max_file_count: The maximum number of files returned.
      prefix: Only return files whose names start with this.
      delimiter: Roll up names below this separator into folders.

    Returns:
      The files, and `nextFileName` to continue the listing from.
    """
    self._check_authorization(LIST_FILE_NAMES)
    body = {'bucketId': bucket_id}
    if start_file_name is not None:
      body['startFileName'] = start_file_name
    if max_file_count is not None:
      body['maxFileCount'] = max_file_count
    if prefix is not None:
      body['prefix'] = prefix
    if delimiter is not None:
      body['delimiter'] = delimiter

    headers = {'Authorization': self._authorization['authorizationToken']}
    return self._call(LIST_FILE_NAMES,
                      self._operation_url(self.storage_api['apiUrl'],
                                          LIST_FILE_NAMES),
                      headers=headers,
                      data=json.dumps(body))

  def get_download_url(self, file_name: str) -> str:
    """Build the URL an uploaded file can be downloaded from.

    No request is made and the file name is used as is.

    Args:
      file_name: The name of the file, e.g. the `fileName` of an upload.

    Returns:
      The download URL.
    """
    self._check_authorization('get_download_url')
    storage_api = self.storage_api
    if not storage_api.get('bucketName'):
      raise ValidationError(
          'The application key is not restricted to a bucket, so there is no '
          'bucket name to build a download URL with.')
    return utils.construct_url(
        storage_api['downloadUrl'],
        '/file/{0}/{1}'.format(storage_api['bucketName'], file_name))
