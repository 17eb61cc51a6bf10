"""
budget_ingestion -- Roster and shift-schedule ingestion.

Reads exported roster and shift files, validates each record and turns it
into the kernel's StaffProfile / ShiftDay values before any cost is
computed.

Architecture:
    budget_ingestion/ is a top-level package. Nothing in kernel/ or
    engines/ imports from ingestion.
"""
