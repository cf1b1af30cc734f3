import pygame
import pytest

from pawnboard.general import GameMode, Player, State
from pawnboard.menus import (
    NO_MODE_MESSAGE,
    NO_TIME_MESSAGE,
    EndGameScreen,
    GameSetting,
    MainMenu,
    PauseMenu,
)


def click(x, y, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=(x, y))


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_main_menu_start_goes_to_settings():
    menu = MainMenu(1600, 900)
    assert menu.handle_event(click(800, 500)) is State.GAME_SETTING
    assert menu.quit_requested is False


def test_main_menu_quit_requests_quit():
    menu = MainMenu(1600, 900)
    assert menu.handle_event(click(800, 600)) is None
    assert menu.quit_requested is True


def test_main_menu_ignores_right_click_and_misses():
    menu = MainMenu(1600, 900)
    assert menu.handle_event(click(800, 500, button=3)) is None
    assert menu.handle_event(click(10, 10)) is None
    assert menu.quit_requested is False


def test_main_menu_render_draws_button_on_black():
    menu = MainMenu(1600, 900)
    surface = pygame.Surface((1600, 900))
    menu.render(surface)
    assert tuple(surface.get_at((0, 0)))[:3] == (0, 0, 0)
    assert tuple(surface.get_at((702, 477)))[:3] == (255, 255, 255)


def test_pause_menu_buttons():
    menu = PauseMenu(1600, 900)
    assert menu.handle_event(click(800, 500)) is State.IN_GAME
    assert menu.handle_event(click(800, 600)) is State.MAIN_MENU
    assert menu.handle_event(click(100, 100)) is None


@pytest.mark.parametrize(
    "loser, result",
    [(Player.WHITE, "Black win"), (Player.BLACK, "White win"), (None, "Someone win")],
)
def test_end_game_result_text(loser, result):
    screen = EndGameScreen("Checkmate", loser)
    assert screen.result == result
    assert screen.message == "Checkmate"


def test_end_game_leave_button():
    screen = EndGameScreen("Time out!", Player.BLACK)
    assert screen.handle_event(click(800, 550)) is State.MAIN_MENU
    assert screen.handle_event(click(800, 300)) is None


def test_setting_mode_buttons_highlight_choice():
    setting = GameSetting(1600, 900)
    assert setting.handle_event(click(1200, 350)) is None
    assert setting.chosen_mode is GameMode.AI_OFFLINE
    colors = [tuple(button.background)[:3] for button, _ in setting.mode_buttons]
    assert colors == [(255, 255, 255), (0, 255, 0), (255, 255, 255)]
    setting.handle_event(click(1200, 250))
    assert setting.chosen_mode is GameMode.PVP_OFFLINE
    colors = [tuple(button.background)[:3] for button, _ in setting.mode_buttons]
    assert colors == [(0, 255, 0), (255, 255, 255), (255, 255, 255)]


def test_setting_ready_without_mode_shows_message():
    setting = GameSetting(1600, 900)
    assert setting.handle_event(click(1200, 650)) is None
    assert setting.message.text == NO_MODE_MESSAGE


def test_setting_ready_without_time_shows_message():
    setting = GameSetting(1600, 900)
    setting.handle_event(click(1200, 250))
    assert setting.handle_event(click(1200, 650)) is None
    assert setting.message.text == NO_TIME_MESSAGE


def test_setting_choose_time_and_start():
    setting = GameSetting(1600, 900)
    setting.handle_event(click(1200, 250))
    setting.handle_event(click(1200, 550))
    assert setting.time_box.shown is True
    setting.handle_event(click(1200, 650))
    assert setting.time_selected == 600
    assert setting.minutes == 10
    assert setting.time_box.shown is False
    assert setting.time_box.title == "Time:10:00"
    assert setting.handle_event(click(1200, 650)) is State.IN_GAME
    assert setting.message is None


def test_setting_click_outside_list_folds_it_and_keeps_time():
    setting = GameSetting(1600, 900)
    setting.handle_event(click(1200, 550))
    setting.handle_event(click(1200, 600))
    assert setting.time_selected == 60
    setting.handle_event(click(1200, 550))
    setting.handle_event(click(100, 100))
    assert setting.time_box.shown is False
    assert setting.time_box.title == "Choose Time"
    assert setting.time_selected == 60


def test_setting_other_modes_do_not_start():
    setting = GameSetting(1600, 900)
    setting.handle_event(click(1200, 450))
    setting.handle_event(click(1200, 550))
    setting.handle_event(click(1200, 750))
    assert setting.time_selected == 1800
    assert setting.handle_event(click(1200, 650)) is None
    assert setting.message is None


def test_setting_message_expires():
    clock = FakeClock()
    setting = GameSetting(1600, 900, clock=clock)
    setting.handle_event(click(1200, 650))
    clock.now = 1.0
    setting.update()
    assert setting.message.text == NO_MODE_MESSAGE
    clock.now = 3.5
    setting.update()
    assert setting.message is None


def test_setting_render_draws_icon_bar():
    setting = GameSetting(1600, 900)
    surface = pygame.Surface((1600, 900))
    setting.render(surface)
    assert tuple(surface.get_at((10, 870)))[:3] == (255, 255, 255)
    assert tuple(surface.get_at((10, 10)))[:3] == (0, 0, 0)