# Routes package init
"""
SightSharing Backend: API Routes Package
========================================

Route Inventory:
    - destinations.py: GET    /destinations          (list)
                       GET    /destinations/{id}     (detail)
                       POST   /destinations          (create, multipart)
                       PUT    /destinations/{id}     (update, multipart)
                       DELETE /destinations/{id}     (delete + image cleanup)
    - gallery.py:      GET    /                      (server-rendered gallery)
                       POST   /gallery/destinations (add form, 303 back)
                       POST   /gallery/destinations/{id} (edit form)
                       POST   /gallery/destinations/{id}/delete
    - health.py:       GET    /health                (service health check)

Routes stay thin: read the request, call DestinationService, return the
response model. Business logic lives in services/.
"""
