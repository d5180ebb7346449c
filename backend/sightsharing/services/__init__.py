# Services package init
"""
SightSharing Backend: Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and the record store.
How:   Services accept the request's database session plus plain inputs,
       apply the workflow, and return response models.

Service Inventory:
    - FileService: Image ingestion (temp write, JPEG re-encode, move) and removal
    - DestinationService: List/get/create/update/delete, combining the
      repository with FileService
"""
