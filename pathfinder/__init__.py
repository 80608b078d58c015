"""DevOps Pathfinder: a skill-gated DevOps roadmap with an AI mentor."""

__version__ = "1.0.0"
