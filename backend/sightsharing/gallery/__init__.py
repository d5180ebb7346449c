# Gallery package init
"""
SightSharing Gallery: Client-Side View Layer
============================================

What:  Everything the gallery page needs, expressed as plain Python:
       - state.py:  GalleryState plus the pure reducer over gallery actions
       - view.py:   GalleryState → GalleryView (cards, pagination, detail panel)
       - render.py: GalleryView → HTML
       - client.py: async HTTP client for the /destinations API and a
                    GallerySession that feeds responses through the reducer

Screens:
    initial ──load──▶ listing ──select──▶ detail
                         ▲                   │
                         └──submit/cancel── editing (modal overlay,
                                             also opened by "add")
"""
