"""Build-and-install pipeline.

Typical usage::

    from gooseboy.pipeline import build, crate_metadata, install, locate

    meta = crate_metadata(crate_root)
    result = build(BuildRequest(crate_root=crate_root, target_dir=meta.target_directory))
    artifact = locate(result.output_dir, meta.artifact_name)
    target = install(artifact, config.mod_dir)

Sub-modules:

* :mod:`~gooseboy.pipeline.manifest` -- crate metadata via ``cargo metadata``.
* :mod:`~gooseboy.pipeline.orchestrator` -- runs ``cargo build``.
* :mod:`~gooseboy.pipeline.locator` -- finds the library in build output.
* :mod:`~gooseboy.pipeline.installer` -- atomic copy into the mod directory.
"""

from gooseboy.pipeline.installer import install
from gooseboy.pipeline.locator import locate
from gooseboy.pipeline.manifest import crate_metadata, read_metadata, resolve_crate_root
from gooseboy.pipeline.orchestrator import build

__all__ = [
    "build",
    "crate_metadata",
    "install",
    "locate",
    "read_metadata",
    "resolve_crate_root",
]
