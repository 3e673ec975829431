from block_blast.game.levels import BoardClearPolicy, ClearedCellsPolicy, LevelProgress


def test_progress_counts_only_clearing_placements():
    progress = LevelProgress()
    progress.record(0)
    progress.record(10)
    progress.record(8)
    assert progress.cells_cleared == 18
    assert progress.clear_events == 2
    progress.restart(12.5)
    assert (progress.cells_cleared, progress.clear_events, progress.level_started_at) == (0, 0, 12.5)


def test_cleared_cells_threshold():
    policy = ClearedCellsPolicy(cells_threshold=15, min_elapsed=40)
    assert not policy.should_level_up(LevelProgress(cells_cleared=14), False, 0.0)
    assert policy.should_level_up(LevelProgress(cells_cleared=15), False, 0.0)


def test_empty_board_needs_minimum_time():
    policy = ClearedCellsPolicy(cells_threshold=15, min_elapsed=40)
    progress = LevelProgress(level_started_at=100.0)
    assert not policy.should_level_up(progress, True, 139.0)
    assert policy.should_level_up(progress, True, 140.0)
    assert not policy.should_level_up(progress, False, 500.0)


def test_empty_board_rule_can_be_disabled():
    policy = ClearedCellsPolicy(cells_threshold=15, min_elapsed=None)
    assert not policy.should_level_up(LevelProgress(), True, 1e9)


def test_board_clear_policy():
    policy = BoardClearPolicy(clear_events_threshold=3)
    assert policy.should_level_up(LevelProgress(), True, 0.0)
    assert not policy.should_level_up(LevelProgress(clear_events=2), False, 0.0)
    assert policy.should_level_up(LevelProgress(clear_events=3), False, 0.0)
