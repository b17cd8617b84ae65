"""Save and load parsed posts to/from files (JSON, YAML, CSV)."""

import csv
import json
import os

import yaml

from .models import PostRecord


def post_to_dict(post):
    return {
        "filename": post.filename,
        "title": post.title,
        "meta": dict(post.meta),
        "excerpt": post.excerpt,
        "paragraphs": [list(p) for p in post.paragraphs],
        "failed": post.failed,
    }


def post_from_dict(item):
    return PostRecord(
        filename=item.get("filename", item["title"]),
        title=item["title"],
        meta=item.get("meta") or {},
        excerpt=item.get("excerpt", ""),
        paragraphs=[tuple(p) for p in item.get("paragraphs", [])],
        failed=bool(item.get("failed", False)),
    )


def save_posts(posts, path):
    """Save posts to a file. Format inferred from extension (.json, .yaml/.yml, .csv)."""
    ext = os.path.splitext(path)[1].lower()

    if ext == ".json":
        with open(path, "w", encoding="utf-8") as f:
            json.dump([post_to_dict(p) for p in posts], f, indent=2, ensure_ascii=False)
    elif ext in (".yaml", ".yml"):
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump([post_to_dict(p) for p in posts], f,
                           default_flow_style=False, allow_unicode=True, sort_keys=False)
    elif ext == ".csv":
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["title", "filename", "author", "written", "excerpt", "text"])
            for post in posts:
                writer.writerow([
                    post.title,
                    post.filename,
                    post.meta.get("author", ""),
                    post.meta.get("written", ""),
                    post.excerpt,
                    post.text(),
                ])
    else:
        print(f"Error: Unsupported file extension '{ext}'. Use .json, .yaml, .yml, or .csv.")
        raise SystemExit(1)

    print(f"Saved {len(posts)} posts to {path}")


def load_posts_from_file(path):
    """Load posts from a JSON or YAML file, keeping their saved order."""
    ext = os.path.splitext(path)[1].lower()

    if ext == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    elif ext in (".yaml", ".yml"):
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    else:
        print(f"Error: Unsupported file extension '{ext}' for loading. Use .json, .yaml, or .yml.")
        raise SystemExit(1)

    posts = [post_from_dict(item) for item in data or []]
    print(f"Loaded {len(posts)} posts from {path}")
    return posts
