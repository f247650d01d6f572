"""Bus names and fixed limits shared across iwd-spider."""

IWD_SERVICE = "net.connman.iwd"

OBJECT_MANAGER_PATH = "/"
OBJECT_MANAGER_INTERFACE = "org.freedesktop.DBus.ObjectManager"
PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

# Network -> Device -> Adapter is the longest reference chain in the schema.
MAX_NESTING_DEPTH = 3

DEVICE_MODES = ("ad-hoc", "station", "ap")

INT16_MIN = -(2 ** 15)
INT16_MAX = 2 ** 15 - 1
