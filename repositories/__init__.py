"""
repositories/ - Data Access Layer
==================================
StorageRepository owns the SQL for the per-user key-value table.
EntryRepository turns the stored JSON into domain objects and back.
"""
