"""Build metadata injected by packagers.

Release builds overwrite these values; source checkouts leave them empty
and gum falls back to the installed package metadata.
"""

VERSION = ""
COMMIT_SHA = ""
