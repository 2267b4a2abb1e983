# snapshot.py
#
# Every emitted step owns a private, fully detached copy of whatever it
# shows. All trackers go through snapshot() so the rule holds uniformly.

import copy


def snapshot(structure):
    """
    Detached copy of a working structure.
    - None stays None
    - objects exposing to_dict() (BST nodes) become nested plain dicts
    - anything else (element lists, merge-tree dicts) is deep-copied
    """
    if structure is None:
        return None
    to_dict = getattr(structure, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return copy.deepcopy(structure)
