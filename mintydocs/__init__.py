"""Documentation hierarchy management on top of a wiki page store.

MintyDocs organizes wiki pages into Product -> Version -> Manual -> Topic
pages, resolves content inheritance between versions, builds tables of
contents for manuals, decides who may view, edit and administer each page,
and plans bulk publish/copy/delete workflows.
"""

__version__ = "0.1.0"
