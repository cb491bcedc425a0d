"""Domain layer for pocketledger application.

Services live in their own modules (``pocketledger.domain.transaction`` and
so on) and are not re-exported here, so the storage layer can import
``pocketledger.domain.entities`` without pulling the services in.
"""
