from typing import Any, Dict, List, NamedTuple, Optional, TypedDict


class Account(NamedTuple):
  """Credentials of a B2 application key."""
  application_key_id: str
  application_key: str


class StorageApiInfo(TypedDict):
  absoluteMinimumPartSize: int
  apiUrl: str
  bucketId: Optional[str]
  bucketName: Optional[str]
  capabilities: List[str]
  downloadUrl: str
  infoType: str
  namePrefix: Optional[str]
  recommendedPartSize: int
  s3ApiUrl: str


class ApiInfo(TypedDict):
  storageApi: StorageApiInfo


class AuthorizeAccountResponse(TypedDict):
  accountId: str
  apiInfo: ApiInfo
  applicationKeyExpirationTimestamp: Optional[int]
  authorizationToken: str


class UploadUrlResponse(TypedDict):
  authorizationToken: str
  bucketId: str
  uploadUrl: str


class FileRetention(TypedDict):
  isClientAuthorizedToRead: bool
  value: Optional[Dict[str, Any]]


class LegalHold(TypedDict):
  isClientAuthorizedToRead: bool
  value: Optional[str]


class ServerSideEncryption(TypedDict):
  algorithm: Optional[str]
  mode: Optional[str]


class UploadFileResponse(TypedDict):
  accountId: str
  action: str
  bucketId: str
  contentLength: int
  contentMd5: str
  contentSha1: str
  contentType: str
  fileId: str
  fileInfo: Dict[str, str]
  fileName: str
  fileRetention: FileRetention
  legalHold: LegalHold
  serverSideEncryption: ServerSideEncryption
  uploadTimestamp: int


class ListFileNamesResponse(TypedDict):
  files: List[UploadFileResponse]
  nextFileName: Optional[str]
