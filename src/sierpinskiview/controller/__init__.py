"""
The CONTROLLER layer drives a frame: it schedules redraws and turns the
subdivision result into calls on a drawing surface.
"""
