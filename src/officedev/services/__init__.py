"""Service layer: device operations behind the ServiceResult contract."""
