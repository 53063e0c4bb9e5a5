"""
Use Cases

Organized into domain folders:
- tenants/: Registration and tenant self-service
- admin/: Platform moderation (approve, reject, suspend, reinstate, delete)
- invitations/: Employee invitation lifecycle
- users/: Caller context
- audit/: Audit logs
"""
