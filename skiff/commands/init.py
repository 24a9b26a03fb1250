# SPDX-License-Identifier: BUSL-1.1
"""skiff init — write a starter skiff.yaml for the current project."""

from skiff.config import ConfigStore, ComposeContext
from skiff.config.resources import DEFAULT_COMPOSE_FILES

# Files that usually decide what an image contains.
CANDIDATE_FILES = (
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
    "Dockerfile",
)
CANDIDATE_DIRECTORIES = ("docker", ".docker")


def cmd_init(args):
    store = ConfigStore(project_dir=getattr(args, "directory", None))

    if store.is_initialized() and not getattr(args, "force", False):
        print("Skiff is already initialized for this project.")
        print(f"  Config: {store.config_file}")
        print("  Use --force to re-initialize.")
        return

    project_dir = store.project_dir
    compose_files = list(DEFAULT_COMPOSE_FILES)
    for name in ("compose.yaml", "compose.yml", "docker-compose.yaml"):
        if not (project_dir / "docker-compose.yml").is_file() and (project_dir / name).is_file():
            compose_files = ["-f", name]
            break

    context = ComposeContext(
        compose_files=compose_files,
        fingerprint_files=[n for n in CANDIDATE_FILES if (project_dir / n).is_file()],
        fingerprint_directories=[n for n in CANDIDATE_DIRECTORIES if (project_dir / n).is_dir()],
        current_directory=str(project_dir),
    )
    store.save_context(context)

    print(f"[OK] Configuration saved to {store.config_file}")
    print(f"  Compose files: {' '.join(context.compose_files)}")
    print(f"  Fingerprint:   {len(context.fingerprint_files)} file(s), "
          f"{len(context.fingerprint_directories)} directory(ies)")
    print()
    print("Next steps:")
    print("  skiff build                  Build images (skipped when unchanged)")
    print("  skiff up -d                  Start all containers")
    print("  skiff wait <container>       Wait for a container to be healthy")
