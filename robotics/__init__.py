"""SSCS robotics dispatch: maps appeal cases to robotics JSON and emails them to the robot."""
