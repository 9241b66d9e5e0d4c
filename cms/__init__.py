"""CMS API - tenant-defined document types, form schemas and content."""
