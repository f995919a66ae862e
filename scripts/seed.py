"""Database seeder for local development."""
import asyncio
import argparse
import random
import time

from blogful.database import async_session, create_tables
from blogful.models import ArticleStyle
from blogful.services import article_service, comment_service, user_service

WORDS = ["python", "fastapi", "postgresql", "async", "testing", "security",
         "deploy", "sqlalchemy", "migrations", "api", "blogging", "cooking"]


def _sentence(n: int) -> str:
    return " ".join(random.choice(WORDS) for _ in range(n)).capitalize() + "."


async def seed(small: bool = False, reset: bool = False):
    num_users = 3 if small else 20
    num_articles = 10 if small else 200
    num_comments_per_article = 2 if small else 5

    print(f"Seeding: {num_users} users, {num_articles} articles, "
          f"~{num_articles * num_comments_per_article} comments")
    start = time.perf_counter()

    await create_tables(drop_first=reset)

    async with async_session() as session:
        users = []
        for i in range(num_users):
            users.append(await user_service.insert_user(session, {
                "fullname": f"Test User {i}",
                "username": f"user_{i:04d}",
                "nickname": f"nick{i}" if i % 2 else None,
                "password": f"password-{i}",
            }))
        print(f"  Created {len(users)} users")

        total_comments = 0
        for i in range(num_articles):
            article = await article_service.insert_article(session, {
                "title": f"Article {i}: {_sentence(3)}",
                "style": random.choice(ArticleStyle.values()),
                "content": " ".join(_sentence(12) for _ in range(5)),
            })
            for _ in range(random.randint(1, num_comments_per_article)):
                await comment_service.insert_comment(session, {
                    "text": _sentence(8),
                    "article_id": article.id,
                    "user_id": random.choice(users).id,
                })
                total_comments += 1

        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Users: {num_users}")
    print(f"  Articles: {num_articles}")
    print(f"  Comments: {total_comments}")


def main():
    parser = argparse.ArgumentParser(description="Seed the blogful database")
    parser.add_argument("--small", action="store_true", help="Use a small dataset")
    parser.add_argument("--reset", action="store_true", help="Drop all tables first")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small, reset=args.reset))


if __name__ == "__main__":
    main()
