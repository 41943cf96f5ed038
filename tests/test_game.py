import os
import unittest

from errors import InvalidNotationError
from game import Piece, Player, Position, STARTING_FEN
from move import Move, Offset


class TestNotation(unittest.TestCase):

    def test_round_trip(self):
        for fen in [
            "B:WK10,K15,18,24,27,28:B12,16,20,K22,K25,K29",
            "B:W18,19,21,23,24,26,29,30,31,32:B1,2,3,4,6,7,9,10,11,12",
            "W:W5,6,7,11,18,19,27:B2,3,4,9,10,17,20,25,26,28",
            "W:W21,22,23,24,25,26,27,28,29,30,31,32:B1,2,3,4,5,6,7,8,9,10,11,12",
            "B:WK18,19,20:BK32",
            "W:WK18,19,20:BK32",
            "W:W:B",
            "B:W:B",
        ]:
            with self.subTest(fen=fen):
                self.assertEqual(Position(fen).to_fen(), fen)
                self.assertEqual(str(Position.from_fen(fen)), fen)

    def test_starting_position(self):
        self.assertEqual(
            Position().to_fen(),
            "B:W21,22,23,24,25,26,27,28,29,30,31,32:B1,2,3,4,5,6,7,8,9,10,11,12",
        )
        self.assertEqual(Position(), Position(STARTING_FEN))

    def test_parsing_normalizes_input(self):
        self.assertEqual(Position("b:wk1,2:bk3").to_fen(), "B:WK1,2:BK3")
        self.assertEqual(Position("W:W27,19,18:B28,3,2").to_fen(), "W:W18,19,27:B2,3,28")
        self.assertEqual(Position("B:W1,,2,:B,5").to_fen(), "B:W1,2:B5")

    def test_invalid_notation(self):
        for fen in [
            "C:W:B",
            "B:W33:B",
            "B:W0:B",
            "B:W-:B",
            "B:WK-:B",
            "B:W+5:B",
            "B:W1",
            "B:W1:B2:W3",
            "B:X1:B2",
            "B:B1:W2",
            "",
        ]:
            with self.subTest(fen=fen):
                with self.assertRaises(InvalidNotationError):
                    Position(fen)

    def test_invalid_notation_is_a_value_error(self):
        with self.assertRaises(ValueError):
            Position("B:W99:B")


class TestPosition(unittest.TestCase):

    def test_squares_and_active_player(self):
        position = Position("W:WK1,2:B32")
        self.assertEqual(len(position.squares), 32)
        self.assertIs(position.squares[0], Piece.WHITE_KING)
        self.assertIs(position.squares[1], Piece.WHITE_MAN)
        self.assertIs(position.squares[31], Piece.BLACK_MAN)
        self.assertIs(position.active_player, Player.WHITE)

    def test_clone_is_independent(self):
        original = Position()
        copy = original.clone()
        self.assertEqual(original, copy)

        copy.make_move(Move(9, Offset.MOVE_SOUTHEAST))
        copy.swap_active_player()
        self.assertNotEqual(original, copy)
        self.assertEqual(original.to_fen(), STARTING_FEN)

    def test_equality_includes_active_player(self):
        self.assertNotEqual(Position("W:W1:B2"), Position("B:W1:B2"))
        self.assertEqual(Position("W:W1:B2"), Position("w:w1:b2"))
        self.assertNotEqual(Position(), STARTING_FEN)

    def test_swap_active_player(self):
        position = Position("W:W:B")
        position.swap_active_player()
        self.assertIs(position.active_player, Player.BLACK)
        position.swap_active_player()
        self.assertIs(position.active_player, Player.WHITE)

    def test_step(self):
        # Even rows
        self.assertEqual(Position.step(Offset.MOVE_SOUTHWEST, 0), 4)
        self.assertEqual(Position.step(Offset.MOVE_SOUTHEAST, 0), 5)
        self.assertIsNone(Position.step(Offset.MOVE_NORTHEAST, 0))
        self.assertIsNone(Position.step(Offset.MOVE_SOUTHEAST, 3))
        # Odd rows
        self.assertIsNone(Position.step(Offset.MOVE_SOUTHWEST, 4))
        self.assertEqual(Position.step(Offset.MOVE_SOUTHEAST, 7), 11)
        self.assertEqual(Position.step(Offset.MOVE_NORTHWEST, 21), 16)
        self.assertEqual(Position.step(Offset.MOVE_NORTHEAST, 21), 17)
        # Jumps
        self.assertEqual(Position.step(Offset.JUMP_SOUTHEAST, 0), 9)
        self.assertIsNone(Position.step(Offset.JUMP_SOUTHWEST, 0))
        self.assertIsNone(Position.step(Offset.JUMP_SOUTHEAST, 3))
        self.assertIsNone(Position.step(Offset.JUMP_SOUTHEAST, 31))
        self.assertEqual(Position.step(Offset.JUMP_NORTHEAST, 21), 14)

    def test_make_move_sequence(self):
        moves = [
            Move(19, Offset.MOVE_NORTHWEST),
            Move(10, Offset.JUMP_SOUTHEAST),
            Move(5, Offset.MOVE_NORTHEAST),
            Move(3, Offset.JUMP_SOUTHWEST),
            Move(11, Offset.MOVE_NORTHEAST),
            Move(4, Offset.JUMP_SOUTHWEST),
            Move(27, Offset.MOVE_NORTHEAST),
            Move(20, Offset.JUMP_SOUTHWEST),
            Move(18, Offset.MOVE_NORTHWEST),
            Move(9, Offset.JUMP_SOUTHEAST),
            Move(1, Offset.MOVE_SOUTHWEST),
            Move(2, Offset.JUMP_SOUTHWEST),
            # Nine jumps in one turn
            Move(5, Offset.JUMP_SOUTHEAST, Offset.JUMP_NORTHEAST, Offset.JUMP_SOUTHEAST,
                 Offset.JUMP_SOUTHWEST, Offset.JUMP_NORTHWEST, Offset.JUMP_SOUTHWEST,
                 Offset.JUMP_SOUTHEAST, Offset.JUMP_NORTHEAST, Offset.JUMP_SOUTHEAST),
        ]
        expected_fens = [
            "B:W5,6,7,11,15,18,27:B2,3,4,9,10,17,20,25,26,28",
            "W:W5,6,7,11,18,27:B2,3,4,9,17,19,20,25,26,28",
            "B:WK1,6,7,11,18,27:B2,3,4,9,17,19,20,25,26,28",
            "W:WK1,6,11,18,27:B2,4,9,10,17,19,20,25,26,28",
            "B:WK1,6,8,18,27:B2,4,9,10,17,19,20,25,26,28",
            "W:WK1,6,18,27:B2,9,10,11,17,19,20,25,26,28",
            "B:WK1,6,18,24:B2,9,10,11,17,19,20,25,26,28",
            "W:WK1,6,18:B2,9,10,11,17,19,25,26,27,28",
            "B:WK1,6,14:B2,9,10,11,17,19,25,26,27,28",
            "W:WK1,6:B2,10,11,17,18,19,25,26,27,28",
            "B:WK5,6:B2,10,11,17,18,19,25,26,27,28",
            "W:WK5:B9,10,11,17,18,19,25,26,27,28",
            "B:WK32:B28",
        ]
        self.assertEqual(len(moves), len(expected_fens))

        position = Position("W:W27,19,18,11,7,6,5:B28,26,25,20,17,10,9,4,3,2")
        for move, expected_fen in zip(moves, expected_fens):
            position.make_move(move)
            position.swap_active_player()
            self.assertEqual(position.to_fen(), expected_fen)

    def test_make_move_returns_landing_square(self):
        position = Position("W:W27,19,18,11,7,6,5:B28,26,25,20,17,10,9,4,3,2")
        self.assertEqual(position.make_move(Move(19, Offset.MOVE_NORTHWEST)), 15)
        # make_move leaves the turn alone
        self.assertIs(position.active_player, Player.WHITE)

    def test_play_returns_new_position(self):
        position = Position()
        child = position.play(Move(9, Offset.MOVE_SOUTHEAST))
        self.assertEqual(position.to_fen(), STARTING_FEN)
        self.assertEqual(
            child.to_fen(),
            "W:W21,22,23,24,25,26,27,28,29,30,31,32:B1,2,3,4,5,6,7,8,10,11,12,14",
        )


class TestMoveGeneration(unittest.TestCase):

    def test_opening_moves(self):
        moves = Position().get_legal_moves()
        self.assertEqual(moves, [
            Move(9, Offset.MOVE_SOUTHEAST),
            Move(9, Offset.MOVE_SOUTHWEST),
            Move(10, Offset.MOVE_SOUTHEAST),
            Move(10, Offset.MOVE_SOUTHWEST),
            Move(11, Offset.MOVE_SOUTHEAST),
            Move(11, Offset.MOVE_SOUTHWEST),
            Move(12, Offset.MOVE_SOUTHWEST),
        ])

    def test_capture_is_mandatory(self):
        position = Position("W:W18,30:B14")
        moves = position.get_legal_moves()
        self.assertEqual(moves, [Move(18, Offset.JUMP_NORTHWEST)])
        self.assertTrue(all(move.is_capture for move in moves))

    def test_men_only_move_forward(self):
        # The black piece behind the white man cannot be taken by it
        position = Position("W:W14:B18")
        moves = position.get_legal_moves()
        self.assertTrue(moves)
        self.assertFalse(any(move.is_capture for move in moves))
        self.assertTrue(all(move.offsets[0] in (Offset.MOVE_NORTHEAST, Offset.MOVE_NORTHWEST)
                            for move in moves))

    def test_kings_capture_backwards(self):
        position = Position("W:WK14:B18")
        self.assertEqual(position.get_legal_moves(), [Move(14, Offset.JUMP_SOUTHEAST)])

    def test_promotion_ends_capture_chain(self):
        position = Position("W:W9:B6,7")
        self.assertEqual(position.get_legal_moves(), [Move(9, Offset.JUMP_NORTHEAST)])

        after = position.play(Move(9, Offset.JUMP_NORTHEAST))
        self.assertEqual(after.to_fen(), "B:WK2:B7")

    def test_king_continues_capture_chain(self):
        position = Position("W:WK9:B6,7")
        self.assertEqual(
            position.get_legal_moves(),
            [Move(9, Offset.JUMP_NORTHEAST, Offset.JUMP_SOUTHEAST)],
        )

    def test_chains_ending_on_the_same_square_are_kept(self):
        position = Position("W:WK22:B9,10,17,18")
        moves = position.get_legal_moves()
        self.assertEqual(moves, [
            Move(22, Offset.JUMP_NORTHEAST, Offset.JUMP_NORTHWEST,
                 Offset.JUMP_SOUTHWEST, Offset.JUMP_SOUTHEAST),
            Move(22, Offset.JUMP_NORTHWEST, Offset.JUMP_NORTHEAST,
                 Offset.JUMP_SOUTHEAST, Offset.JUMP_SOUTHWEST),
        ])
        self.assertEqual(position.play(moves[0]), position.play(moves[1]))
        self.assertEqual(position.play(moves[0]).to_fen(), "B:WK22:B")

    def test_get_captures_from_empty_square(self):
        self.assertEqual(Position().get_captures(15), [])

    def test_no_pieces_no_moves(self):
        position = Position("W:W:B1")
        self.assertEqual(position.get_legal_moves(), [])
        self.assertTrue(position.is_game_over())
        self.assertIs(position.get_winner(), Player.BLACK)

    def test_blocked_pieces_have_no_moves(self):
        # White man on 29 is blocked by a black man on 25 that cannot be jumped
        position = Position("W:W29:B22,25")
        self.assertEqual(position.get_legal_moves(), [])
        self.assertIs(position.get_winner(), Player.BLACK)

    def test_game_in_progress_has_no_winner(self):
        self.assertFalse(Position().is_game_over())
        self.assertIsNone(Position().get_winner())


class TestPerft(unittest.TestCase):

    EXPECTED = {
        1: 7,
        2: 49,
        3: 302,
        4: 1469,
        5: 7361,
        6: 36768,
        7: 179740,
        8: 845931,
        9: 3963680,
        10: 18391564,
    }

    def test_perft_shallow(self):
        position = Position()
        for depth in range(1, 7):
            with self.subTest(depth=depth):
                self.assertEqual(position.perft(depth), self.EXPECTED[depth])

    @unittest.skipUnless(os.environ.get("DRAUGHTS_SLOW_TESTS"), "slow perft depths")
    def test_perft_deep(self):
        position = Position()
        for depth in range(7, 11):
            with self.subTest(depth=depth):
                self.assertEqual(position.perft(depth), self.EXPECTED[depth])

    def test_perft_rejects_zero_depth(self):
        with self.assertRaises(ValueError):
            Position().perft(0)


class TestBoardDisplay(unittest.TestCase):

    def test_board_str(self):
        lines = Position("B:WK32:B1").board_str().splitlines()
        self.assertEqual(len(lines), 9)
        self.assertEqual(lines[0].split(), [str(c) for c in range(8)])
        self.assertEqual(lines[1].split(), ["0", "b", ".", ".", "."])
        self.assertEqual(lines[8].split(), ["7", ".", ".", ".", "W"])


if __name__ == "__main__":
    unittest.main()
