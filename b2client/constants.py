import os

# B2
B2_APPLICATION_KEY_ID = os.getenv('B2_APPLICATION_KEY_ID')
B2_APPLICATION_KEY = os.getenv('B2_APPLICATION_KEY')
B2_USER_AGENT = os.getenv('B2_USER_AGENT')

B2_API_HOST = 'https://api.backblazeb2.com'
B2_API_VERSION = '/b2api/v3'

B2_AUTO_CONTENT_TYPE = 'b2/x-auto'
JSON_CONTENT_TYPE = 'application/json'

# Length of a hex encoded SHA-1 digest
SHA1_HEX_LENGTH = 40
