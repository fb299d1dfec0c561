from ..protocol.models import Coordinates, MachineStatus


def _coords(c: Coordinates) -> str:
    return f"X{c.x:.3f} Y{c.y:.3f} Z{c.z:.3f}"


def format_status(status: MachineStatus) -> str:
    lines = [f"State: {status.state}"]
    if status.machine_position:
        lines.append(f"Machine position: {_coords(status.machine_position)}")
    if status.work_position:
        lines.append(f"Work position: {_coords(status.work_position)}")
    if status.work_coordinate_offset:
        lines.append(f"Work offset: {_coords(status.work_coordinate_offset)}")
    if status.buffer:
        lines.append(f"Buffer: {status.buffer.planner_blocks} blocks, {status.buffer.rx_bytes} bytes free")
    if status.feed_and_speed:
        lines.append(f"Feed: {status.feed_and_speed.feed_rate}, spindle: {status.feed_and_speed.spindle}")
    if status.pin_state:
        lines.append(f"Pins: {status.pin_state}")
    if status.override_values:
        ov = status.override_values
        lines.append(f"Overrides: feed {ov.feed}%, rapids {ov.rapids}%, spindle {ov.spindle}%")
    return "\n".join(lines)
