from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt

from chromosome import Chromosome


#####################################################################################
## Console output
## Row i gets a Q in column genes[i], every other square is a dot
def render_board(genes: Sequence[int]) -> str:
    n = len(genes)
    lines = []
    for i in range(n):
        lines.append("".join("Q " if genes[i] == j else "• " for j in range(n)).rstrip())
    return "\n".join(lines)


def print_board(chromosome: Chromosome) -> None:
    print(render_board(chromosome.genes))


#####################################################################################
## Use of matplotlib
## We use grey background, alternating tiles, and a Q on every queen square
def plot_board(chromosome: Chromosome, path: Optional[str] = None):
    n = chromosome.size
    fig, ax = plt.subplots(figsize=(8, 8))
    fig.patch.set_facecolor('grey')
    ax.set_facecolor('grey')

    ##Create a chessboard
    chessboard = np.zeros((n, n))
    for i in range(n):
        for j in range(n):
            if (i + j) % 2 == 0:
                chessboard[i, j] = 1  ##White tiles
    ax.imshow(chessboard, cmap='binary', interpolation='nearest')

    ##Add the queens, white on dark tiles and black on light ones
    for row, col in enumerate(chromosome.genes):
        color = 'white' if (row + col) % 2 == 0 else 'black'
        ax.text(col, row, 'Q', fontsize=200 / n, ha='center', va='center',
                color=color, weight='bold')

    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(f'{n}-Queens | conflicts: {chromosome.fitness}', color='white', fontsize=16)
    fig.tight_layout()
    _finish(fig, path)
    return fig


#####################################################################################
## Best conflict count of every generation, generation 0 is the initial population
def plot_history(history: Sequence[int], path: Optional[str] = None):
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(range(len(history)), history, 'b-', linewidth=2)

    ax.set_xlabel('Generation', fontsize=10)
    ax.set_ylabel('Best conflicts', fontsize=10)
    ax.set_title('Best fitness per generation')
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    _finish(fig, path)
    return fig


def _finish(fig, path: Optional[str]) -> None:
    if path:
        fig.savefig(path)
        plt.close(fig)
    else:
        plt.show()
