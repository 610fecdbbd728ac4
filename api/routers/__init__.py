"""
API Routers - HTTP endpoint handlers

Each router handles a specific domain of functionality:
- items: CRUD over stored JSON documents (/json)
- health: Health checks and storage/sweeper status
"""
