"""Skills — discovery and metadata for installable agent skills.

A skill is a directory under a root's ``skills/`` folder holding a
``SKILL.md`` manifest and any supporting resources. This package provides:
- Metadata: read the name and description from a manifest header
- Discovery: walk the core root and selected module roots for skills
"""

CORE_SOURCE = "core"
SKILLS_FOLDER = "skills"
MANIFEST_FILENAME = "SKILL.md"
