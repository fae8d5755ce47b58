"""
Sample data for the blog application.
Ids, slugs, timestamps and view counts are fixed so listings are reproducible.
"""

from typing import Any

from blogstore.author_repository import AuthorRepository
from blogstore.category_repository import CategoryRepository
from blogstore.comment_repository import CommentRepository
from blogstore.post_repository import PostRepository
from blogstore.store import ContentStore
from blogstore.store_context import StoreManager

SEED_USERS: list[dict[str, Any]] = [
    {
        "id": "1",
        "name": "Taro Tanaka",
        "email": "tanaka@example.com",
        "bio": "Frontend developer working mostly with React and Next.js.",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "2",
        "name": "Hanako Sato",
        "email": "sato@example.com",
        "bio": "UI/UX designer and frontend developer interested in design systems.",
        "created_at": "2024-01-02T00:00:00Z",
        "updated_at": "2024-01-02T00:00:00Z",
    },
    {
        "id": "3",
        "name": "Jiro Yamada",
        "email": "yamada@example.com",
        "bio": "Backend developer building APIs with Node.js and TypeScript.",
        "created_at": "2024-01-03T00:00:00Z",
        "updated_at": "2024-01-03T00:00:00Z",
    },
]

SEED_CATEGORIES: list[dict[str, Any]] = [
    {
        "id": "1",
        "name": "Next.js",
        "slug": "nextjs",
        "description": "Articles about Next.js",
        "color": "#000000",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "2",
        "name": "React",
        "slug": "react",
        "description": "Articles about React",
        "color": "#61DAFB",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "3",
        "name": "TypeScript",
        "slug": "typescript",
        "description": "Articles about TypeScript",
        "color": "#3178C6",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "4",
        "name": "CSS",
        "slug": "css",
        "description": "Articles about CSS and styling",
        "color": "#1572B6",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "5",
        "name": "Tutorial",
        "slug": "tutorial",
        "description": "Step-by-step tutorials",
        "color": "#FF6B6B",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
]

SEED_POSTS: list[dict[str, Any]] = [
    {
        "id": "1",
        "title": "A Deep Dive into the New Features of Next.js 15",
        "slug": "nextjs-15-new-features",
        "content": (
            "# A Deep Dive into the New Features of Next.js 15\n\n"
            "Next.js 15 ships with many new features and improvements.\n\n"
            "## App Router improvements\n\n"
            "- Faster routing\n- Extended metadata API\n- Better error handling\n\n"
            "## Server Components optimizations\n\n"
            "Server Components now run more efficiently, even in complex applications."
        ),
        "excerpt": (
            "A detailed look at the main features and improvements in Next.js 15, "
            "from App Router changes to Server Components optimizations."
        ),
        "author_id": "1",
        "category_id": "1",
        "tags": ["Next.js", "React", "Web Development", "Frontend"],
        "published": True,
        "published_at": "2024-01-15T10:00:00Z",
        "created_at": "2024-01-15T09:00:00Z",
        "updated_at": "2024-01-15T10:00:00Z",
        "view_count": 1250,
    },
    {
        "id": "2",
        "title": "React Server Components: Basics and Practice",
        "slug": "react-server-components-guide",
        "content": (
            "# React Server Components: Basics and Practice\n\n"
            "Server Components run on the server and ship no JavaScript to the client.\n\n"
            "## Benefits\n\n"
            "1. Smaller bundles\n2. Faster initial loads\n3. Better SEO"
        ),
        "excerpt": (
            "From the core ideas of React Server Components to practical usage: "
            "the key technique for better performance."
        ),
        "author_id": "2",
        "category_id": "2",
        "tags": ["React", "Server Components", "Performance", "Next.js"],
        "published": True,
        "published_at": "2024-01-10T14:30:00Z",
        "created_at": "2024-01-10T13:00:00Z",
        "updated_at": "2024-01-10T14:30:00Z",
        "view_count": 890,
    },
    {
        "id": "3",
        "title": "Safer React Development with TypeScript",
        "slug": "typescript-react-development",
        "content": (
            "# Safer React Development with TypeScript\n\n"
            "Static types catch errors at compile time and improve editor support.\n\n"
            "## Typing components\n\n"
            "interface Props { title: string; count: number; onIncrement: () => void }"
        ),
        "excerpt": (
            "Best practices for React development with static types, "
            "and how to get the most out of type safety."
        ),
        "author_id": "3",
        "category_id": "3",
        "tags": ["TypeScript", "React", "Type Safety", "Productivity"],
        "published": True,
        "published_at": "2024-01-08T16:00:00Z",
        "created_at": "2024-01-08T15:00:00Z",
        "updated_at": "2024-01-08T16:00:00Z",
        "view_count": 675,
    },
    {
        "id": "4",
        "title": "Migrating from CSS-in-JS to CSS Modules",
        "slug": "css-in-js-to-css-modules-migration",
        "content": (
            "# Migrating from CSS-in-JS to CSS Modules\n\n"
            "CSS Modules have no runtime overhead and shorten build times.\n\n"
            "## Steps\n\n"
            "1. Create the module stylesheets\n2. Update the components"
        ),
        "excerpt": (
            "A practical guide to moving from CSS-in-JS to CSS Modules "
            "for better performance and maintainability."
        ),
        "author_id": "2",
        "category_id": "4",
        "tags": ["CSS", "CSS Modules", "Performance", "Styling"],
        "published": True,
        "published_at": "2024-01-05T11:15:00Z",
        "created_at": "2024-01-05T10:00:00Z",
        "updated_at": "2024-01-05T11:15:00Z",
        "view_count": 432,
    },
    {
        "id": "5",
        "title": "The Complete Next.js Guide for Beginners",
        "slug": "nextjs-beginner-complete-guide",
        "content": (
            "# The Complete Next.js Guide for Beginners\n\n"
            "Next.js is a full-stack framework built on React.\n\n"
            "## Setup\n\n"
            "npx create-next-app@latest my-blog\n\n"
            "## Pages, dynamic routes and data fetching"
        ),
        "excerpt": (
            "A complete guide for Next.js beginners, from setup to the core "
            "features, step by step."
        ),
        "author_id": "1",
        "category_id": "5",
        "tags": ["Next.js", "Beginner", "Tutorial", "React"],
        "published": True,
        "published_at": "2024-01-03T09:00:00Z",
        "created_at": "2024-01-03T08:00:00Z",
        "updated_at": "2024-01-03T09:00:00Z",
        "view_count": 2100,
    },
    {
        "id": "6",
        "title": "Putting Modern CSS to Work",
        "slug": "modern-css-techniques",
        "content": (
            "# Putting Modern CSS to Work\n\n"
            "## CSS Grid Layout\n\n## Custom properties\n\n## Container queries"
        ),
        "excerpt": "How to use CSS Grid, custom properties and container queries.",
        "author_id": "2",
        "category_id": "4",
        "tags": ["CSS", "CSS Grid", "CSS Variables", "Modern CSS"],
        "published": False,
        "created_at": "2024-01-20T14:00:00Z",
        "updated_at": "2024-01-20T14:00:00Z",
        "view_count": 0,
    },
]

SEED_COMMENTS: list[dict[str, Any]] = [
    {
        "id": "1",
        "content": "Very helpful, I learned a lot about the new features in Next.js 15!",
        "author_name": "Ichiro Suzuki",
        "author_email": "suzuki@example.com",
        "post_id": "1",
        "created_at": "2024-01-16T10:30:00Z",
        "updated_at": "2024-01-16T10:30:00Z",
    },
    {
        "id": "2",
        "content": "The explanation of Server Components was easy to follow.",
        "author_name": "Misaki Takahashi",
        "author_email": "takahashi@example.com",
        "post_id": "2",
        "created_at": "2024-01-11T16:45:00Z",
        "updated_at": "2024-01-11T16:45:00Z",
    },
    {
        "id": "3",
        "content": "The typing examples were concrete and easy to understand.",
        "author_name": "Kenta Ito",
        "author_email": "ito@example.com",
        "post_id": "3",
        "created_at": "2024-01-09T09:15:00Z",
        "updated_at": "2024-01-09T09:15:00Z",
    },
    {
        "id": "4",
        "content": "I was considering a move to CSS Modules, so this was very useful.",
        "author_name": "Sakura Watanabe",
        "author_email": "watanabe@example.com",
        "post_id": "4",
        "created_at": "2024-01-06T13:20:00Z",
        "updated_at": "2024-01-06T13:20:00Z",
    },
]


async def seed_store(store: ContentStore) -> ContentStore:
    """Load the sample users, categories, posts and comments into store"""
    async with StoreManager.session(store):
        await AuthorRepository().create_many(SEED_USERS)
        await CategoryRepository().create_many(SEED_CATEGORIES)
        await PostRepository().create_many(SEED_POSTS)
        await CommentRepository().create_many(SEED_COMMENTS)
    return store
