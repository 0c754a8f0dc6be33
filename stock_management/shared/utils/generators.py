"""Id generation for permission and role-permission rows."""

from cuid2 import Cuid

from stock_management.core.constants import ID_LENGTH

_id_generator = Cuid(length=ID_LENGTH)


def generate_cuid() -> str:
    """Return a new CUID2 id of ID_LENGTH characters.

    Ids are lowercase alphanumeric and start with a letter, so they are safe
    as cache key components.
    """
    return _id_generator.generate()
