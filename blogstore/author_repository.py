from blogstore.entities import User, UserUpdate
from blogstore.repository import Repository


class AuthorRepository(Repository[User, User, UserUpdate]):
    def __init__(self):
        super().__init__(
            entity_schema_class=User,
            entity_domain_class=User,
            update_class=UserUpdate,
            table_name="users",
        )

    async def find_by_email(self, email: str) -> User | None:
        # Emails are unique in practice only, so this is a scan
        return await self.find_by("email", email)
