def render_status(cluster, step, in_flight):
    """Render server ceilings and client rounds as a plain text table."""
    lines = [f'Step {step:05d} | in flight={in_flight}']

    ceilings = ' '.join(f'S{s.id}={s.highest_accepted_id}' for s in cluster.servers)
    lines.append(f'  servers: {ceilings}')

    for c in cluster.clients:
        p = c.proposer
        state = 'awaiting' if p.round_open else 'done'
        lines.append(
            f'  C{c.id:<3d} committed={p.committed_id:<4d} proposing={p.proposed_id:<4d} '
            f'votes=+{p.accepts()}/-{p.rejects()} of {p.quorum} [{state}]'
        )

    return '\n'.join(lines)
