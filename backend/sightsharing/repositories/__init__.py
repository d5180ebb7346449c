# Repositories package init
"""
SightSharing Backend: Record Store
==================================

What:  SQL access for the single `destinations` table.
Who:   DestinationService is the only caller.
"""
