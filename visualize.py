# visualize.py
import argparse

import matplotlib.pyplot as plt
from matplotlib.animation import PillowWriter

from geometry import (NUM_STATES, NUM_FRAMES, GIF_PATH, FPS, DPI,
                      default_parameters)
from kinematics import truss_members
from sequencer import ConfigurationError, Mode, sequence_for_mode
from utils import angle_label

# member group -> line style
MEMBER_STYLE = {
    'arms':      dict(color='k', linewidth=2),
    'verticals': dict(color='b', linewidth=1.5),
    'braces':    dict(color='r', linewidth=1.5),
    'hoops':     dict(color='k', linestyle='--', linewidth=1),
}


def draw_segments(ax, S, **style):
    lines = []
    for seg in S:
        line, = ax.plot(seg[:, 0], seg[:, 1], seg[:, 2], **style)
        lines.append(line)
    return lines


def frame_axes(ax, params, R):
    if R <= 0:
        R = params.a
    ax.set_xlim(-1.5*R, 1.5*R)
    ax.set_ylim(-1.5*R, 1.5*R)
    ax.set_zlim(params.z_lower, 1.5*params.z_upper)
    ax.set_box_aspect([1, 1, 1])
    ax.view_init(elev=30, azim=-37.5)
    ax.set_xlabel('X'); ax.set_ylabel('Y'); ax.set_zlabel('Z')
    ax.grid(True)


def draw_state(ax, state, params, limit_radius=None):
    """Draws one folding state: nodes, center joints and all member groups."""
    Nu, Nl = state.upper_nodes, state.lower_nodes
    Cu, Cl = state.upper_centers, state.lower_centers

    ax.scatter(Nu[:, 0], Nu[:, 1], Nu[:, 2], s=16, c='r')
    ax.scatter(Nl[:, 0], Nl[:, 1], Nl[:, 2], s=16, c='b')
    ax.scatter(Cu[:, 0], Cu[:, 1], Cu[:, 2], s=16, c='g')
    ax.scatter(Cl[:, 0], Cl[:, 1], Cl[:, 2], s=16, c='m')

    lines = {}
    for name, S in truss_members(state).items():
        lines[name] = draw_segments(ax, S, **MEMBER_STYLE[name])

    frame_axes(ax, params, state.radius if limit_radius is None else limit_radius)
    return lines


def plot_static(params, states):
    """One labelled panel per state, all framed to the largest hoop."""
    R_max = max(s.radius for s in states)
    fig = plt.figure(figsize=(5*len(states), 5))
    fig.patch.set_facecolor('white')
    axes = []
    for k, state in enumerate(states):
        ax = fig.add_subplot(1, len(states), k + 1, projection='3d')
        draw_state(ax, state, params, limit_radius=R_max)
        ax.set_title(angle_label(state.phi, 0), fontweight='bold')
        axes.append(ax)
    return fig, axes


def save_animation(params, states, path, fps=FPS, dpi=DPI):
    """
    Appends one cleared, labelled frame per state to a GIF at path.
    The writer is finished and the figure closed even if drawing fails.
    """
    fig = plt.figure(figsize=(5, 5))
    fig.patch.set_facecolor('white')
    ax = fig.add_subplot(111, projection='3d')
    writer = PillowWriter(fps=fps)
    try:
        with writer.saving(fig, str(path), dpi):
            for state in states:
                ax.cla()
                draw_state(ax, state, params)
                R = state.radius if state.radius > 0 else params.a
                ax.text(-1.4*R, 1.4*R, 1.2*params.z_upper, angle_label(state.phi, 1),
                        fontsize=14, fontweight='bold',
                        bbox=dict(facecolor='w', edgecolor='k', pad=3))
                writer.grab_frame()
    finally:
        plt.close(fig)
    return path


def build_parser():
    parser = argparse.ArgumentParser(
        description='Hoop truss deployment: static snapshots or animated GIF.')
    parser.add_argument('--mode', default=Mode.ANIMATION.value,
                        help='"static" or "animation" (default: animation)')
    parser.add_argument('--states', type=int, default=NUM_STATES,
                        help='static: number of folding states')
    parser.add_argument('--frames', type=int, default=NUM_FRAMES,
                        help='animation: number of frames')
    parser.add_argument('--units', type=int, default=None, help='number of scissor units')
    parser.add_argument('--arm', type=float, default=None, help='scissor arm length')
    parser.add_argument('--height', type=float, default=None, help='hoop height')
    parser.add_argument('--workers', type=int, default=None,
                        help='solve folding states on this many threads')
    parser.add_argument('--output', default=None,
                        help=f'animation GIF (default: {GIF_PATH}) or static image')
    parser.add_argument('--fps', type=int, default=FPS)
    parser.add_argument('--no-show', action='store_true', help='do not open a window')
    return parser


def run(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {}
    if args.units is not None:
        overrides['n'] = args.units
    if args.arm is not None:
        overrides['a'] = args.arm
    if args.height is not None:
        overrides['z_upper'] = args.height
    params = default_parameters(**overrides)

    try:
        mode, states = sequence_for_mode(params, args.mode, args.states, args.frames,
                                         workers=args.workers)
    except ConfigurationError as e:
        parser.error(str(e))

    if mode is Mode.STATIC:
        fig, _ = plot_static(params, states)
        if args.output:
            fig.savefig(args.output, dpi=DPI)
            print("Figure saved:", args.output)
        if not args.no_show:
            plt.show()
        plt.close(fig)
    else:
        out = args.output or GIF_PATH
        save_animation(params, states, out, fps=args.fps)
        print(f"GIF saved: {out} ({len(states)} frames)")
    return mode, states


if __name__ == "__main__":
    run()
