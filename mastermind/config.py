# Defaults shared by the CLI, the evaluation scripts and the environment.
CONFIG = {
    # Game shape
    "num_colors": 6,
    "num_spaces": 4,

    # Knuth's opening for 6 colors / 4 spaces
    "initial_guess": (0, 0, 1, 1),
    "max_turns": 10,

    # Decision engine
    "max_workers": None,    # None -> ThreadPoolExecutor default
    "chunk_size": 64,       # guess indices per worker task
    "block_size": 256,      # members scored per vectorized block

    # Randomness / reproducibility
    "seed": None,
}
