"""Constants shared across hubinstall domain models."""

METADATA_KEY_NAME = "name"
METADATA_KEY_NAMESPACE = "namespace"
METADATA_KEY_HUB = "hub"
METADATA_KEY_TYPE = "type"
METADATA_KEY_ID = "id"

MAX_METADATA_VALUE_LENGTH = 256

LOOKUP_PATH = "/hub2/{endpoint}"
CREATE_PATH = "/{segment}/create"
INSTALL_PATH = "/{segment}/saveOrUpdateJson"
UPDATE_PATH = "/{segment}/ideUpdate?id={remote_id}"

UPDATE_CONTENT_TYPE = "text/plain; charset=ISO-8859-1"
INSTALL_CONTENT_TYPE = "application/json"

UNKNOWN_ERROR = "Unknown error"
