import unittest
from unittest.mock import Mock

from errors import NotFoundError, TransportError
from identity import is_same_user, resolve_assignee
from models import AccountRef, ChatUser, TicketingUser

TARO = TicketingUser(id=7, login="tyamada", first_name="Taro", last_name="Yamada")


class TestIsSameUser(unittest.TestCase):
    def test_login_equals_handle(self):
        chat_user = ChatUser(id="U1", handle="tyamada", real_name="Somebody Else")
        self.assertTrue(is_same_user(TARO, chat_user))

    def test_same_login_ignores_names(self):
        user = TicketingUser(id=1, login="jdoe", first_name="", last_name="")
        self.assertTrue(is_same_user(user, ChatUser(id="U1", handle="jdoe", real_name="x")))

    def test_name_orders(self):
        for real_name in ("YamadaTaro", "Yamada Taro", "TaroYamada", "Taro Yamada"):
            with self.subTest(real_name=real_name):
                chat_user = ChatUser(id="U1", handle="taro", real_name=real_name)
                self.assertTrue(is_same_user(TARO, chat_user))

    def test_full_width_space_is_a_space(self):
        chat_user = ChatUser(id="U1", handle="taro", real_name="Yamada　Taro")
        self.assertTrue(is_same_user(TARO, chat_user))

    def test_no_match(self):
        chat_user = ChatUser(id="U1", handle="hanako", real_name="Hanako Suzuki")
        self.assertFalse(is_same_user(TARO, chat_user))

    def test_alias_substitution(self):
        chat_user = ChatUser(id="U1", handle="taro", real_name="Tarou Yamada")
        self.assertFalse(is_same_user(TARO, chat_user))
        self.assertTrue(is_same_user(TARO, chat_user, {"Tarou Yamada": "Taro Yamada"}))

    def test_alias_to_unspaced_name(self):
        chat_user = ChatUser(id="U1", handle="taro", real_name="T. Yamada")
        self.assertTrue(is_same_user(TARO, chat_user, {"T. Yamada": "YamadaTaro"}))

    def test_alias_applied_once(self):
        chat_user = ChatUser(id="U1", handle="taro", real_name="A")
        aliases = {"A": "B", "B": "Taro Yamada"}
        self.assertFalse(is_same_user(TARO, chat_user, aliases))

    def test_cyclic_aliases_terminate(self):
        chat_user = ChatUser(id="U1", handle="taro", real_name="A")
        self.assertFalse(is_same_user(TARO, chat_user, {"A": "B", "B": "A"}))
        self.assertFalse(is_same_user(TARO, chat_user, {"A": "A"}))


class TestResolveAssignee(unittest.TestCase):
    def setUp(self):
        self.users = Mock()
        self.users.fetch_user.return_value = TARO
        self.directory = Mock()
        self.directory.list_users.return_value = [
            ChatUser(id="U0", handle="hanako", real_name="Hanako Suzuki"),
            ChatUser(id="U7", handle="taro", real_name="山田　太郎"),
            ChatUser(id="U8", handle="tyamada", real_name=""),
        ]

    def test_no_assignee(self):
        self.assertEqual(resolve_assignee(None, self.users, self.directory), "")
        self.users.fetch_user.assert_not_called()
        self.directory.list_users.assert_not_called()

    def test_mention_for_matching_user(self):
        token = resolve_assignee(AccountRef(7, "Taro Yamada"), self.users, self.directory)
        self.assertEqual(token, "<@U8>")
        self.users.fetch_user.assert_called_once_with(7)

    def test_first_match_wins(self):
        self.directory.list_users.return_value = [
            ChatUser(id="UA", handle="taro", real_name="Taro Yamada"),
            ChatUser(id="UB", handle="tyamada", real_name="Taro Yamada"),
        ]
        token = resolve_assignee(AccountRef(7, "Taro Yamada"), self.users, self.directory)
        self.assertEqual(token, "<@UA>")

    def test_user_lookup_failure_returns_display_name(self):
        self.users.fetch_user.side_effect = NotFoundError("gone")
        token = resolve_assignee(AccountRef(7, "Taro Yamada"), self.users, self.directory)
        self.assertEqual(token, "Taro Yamada")
        self.directory.list_users.assert_not_called()

    def test_user_lookup_failure_uses_aliased_display_name(self):
        self.users.fetch_user.side_effect = TransportError("boom")
        token = resolve_assignee(
            AccountRef(7, "山田 太郎"), self.users, self.directory, {"山田 太郎": "taro"}
        )
        self.assertEqual(token, "taro")

    def test_group_assignee_becomes_broadcast(self):
        self.users.fetch_user.side_effect = NotFoundError("group, not a user")
        token = resolve_assignee(
            AccountRef(3, "Developers"), self.users, self.directory, {"Developers": "channel"}
        )
        self.assertEqual(token, "<!channel>")
        token = resolve_assignee(AccountRef(4, "@here"), self.users, self.directory)
        self.assertEqual(token, "<!here>")

    def test_directory_failure_returns_login(self):
        self.directory.list_users.side_effect = TransportError("slack down")
        token = resolve_assignee(AccountRef(7, "Taro Yamada"), self.users, self.directory)
        self.assertEqual(token, "tyamada")

    def test_login_alias_applied_before_matching(self):
        self.directory.list_users.return_value = [
            ChatUser(id="U9", handle="taro.y", real_name=""),
        ]
        token = resolve_assignee(
            AccountRef(7, "Taro Yamada"), self.users, self.directory, {"tyamada": "taro.y"}
        )
        self.assertEqual(token, "<@U9>")

    def test_unmatched_returns_login(self):
        self.directory.list_users.return_value = [
            ChatUser(id="U0", handle="hanako", real_name="Hanako Suzuki"),
        ]
        token = resolve_assignee(AccountRef(7, "Taro Yamada"), self.users, self.directory)
        self.assertEqual(token, "tyamada")


if __name__ == "__main__":
    unittest.main()
