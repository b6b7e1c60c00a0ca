"""
Built-in definition tables.

``RESOURCES`` holds the general resources requested through
``Resource_List`` and select chunks; ``RESERVATION_ATTRIBUTES`` holds the
reservation-scoped attributes that ``queue=`` preemption targets are checked
against. Both are built once, at import, and never change.
"""

from __future__ import annotations

from batchguard.definitions.datatypes import (
    verify_boolean,
    verify_duration,
    verify_float,
    verify_long,
    verify_non_negative,
    verify_queue_name,
    verify_size,
    verify_string,
)
from batchguard.definitions.table import DefinitionTable, ResourceDefinition
from batchguard.verification.preempt import verify_preempt_targets
from batchguard.verification.scalar import verify_job_name
from batchguard.verification.select import verify_select


def _count(name: str, description: str) -> ResourceDefinition:
    return ResourceDefinition(name, verify_long, verify_non_negative, "long", description)


def _size(name: str, description: str) -> ResourceDefinition:
    return ResourceDefinition(name, verify_size, None, "size", description)


def _duration(name: str, description: str) -> ResourceDefinition:
    return ResourceDefinition(name, verify_duration, None, "duration", description)


def _string(name: str, description: str) -> ResourceDefinition:
    return ResourceDefinition(name, verify_string, None, "string", description)


RESOURCES = DefinitionTable(
    "resources",
    [
        _count("ncpus", "CPUs per chunk"),
        _count("mpiprocs", "MPI processes per chunk"),
        _count("ompthreads", "OpenMP threads per chunk"),
        _count("nodect", "Number of chunks"),
        _count("ngpus", "GPUs per chunk"),
        _count("naccelerators", "Accelerators per chunk"),
        _count("cpupercent", "CPU percentage"),
        _size("mem", "Physical memory"),
        _size("vmem", "Virtual memory"),
        _size("pmem", "Physical memory per process"),
        _size("pvmem", "Virtual memory per process"),
        _size("file", "Largest file size"),
        _duration("walltime", "Wall-clock time limit"),
        _duration("cput", "CPU time limit"),
        _duration("pcput", "CPU time limit per process"),
        _duration("min_walltime", "Shrink-to-fit lower bound"),
        _duration("max_walltime", "Shrink-to-fit upper bound"),
        _string("arch", "Architecture"),
        _string("host", "Execution host"),
        _string("vnode", "Execution vnode"),
        _string("place", "Placement directive"),
        _string("software", "Licensed software"),
        ResourceDefinition("accelerator", verify_boolean, None, "boolean", "Chunk has accelerators"),
        ResourceDefinition("ncpus_factor", verify_float, None, "float", "CPU speed factor"),
        ResourceDefinition("select", verify_string, verify_select, "string", "Chunk selection"),
        ResourceDefinition(
            "preempt_targets",
            verify_string,
            verify_preempt_targets,
            "string",
            "Jobs eligible for preemption",
        ),
    ],
)

RESERVATION_ATTRIBUTES = DefinitionTable(
    "reservation-attributes",
    [
        ResourceDefinition("queue", verify_string, verify_queue_name, "string", "Reservation queue"),
        ResourceDefinition("Reserve_Name", verify_string, verify_job_name, "string", "Reservation name"),
        ResourceDefinition("reserve_start", verify_long, verify_non_negative, "long", "Start time (epoch)"),
        ResourceDefinition("reserve_end", verify_long, verify_non_negative, "long", "End time (epoch)"),
        _duration("reserve_duration", "Reservation length"),
        _count("reserve_count", "Occurrences of a standing reservation"),
    ],
)
