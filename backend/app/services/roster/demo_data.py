# backend/app/services/roster/demo_data.py
"""Sample rosters for trying the planner without typing a class list."""

DEMO_GROUP_A = """1. 陳大文 Peter
2. 李小龍 Bruce
3. 張學友 Jacky
4. 劉德華 Andy
5. 黎明 Leon
6. 郭富城 Aaron
7. 梁朝偉 Tony
8. 周星馳 Stephen
9. 成龍 Jackie
10. 甄子丹 Donnie"""

DEMO_GROUP_B = """11. 古天樂 Louis
12. 吳彥祖 Daniel
13. 謝霆鋒 Nicholas
14. 陳奕迅 Eason
15. 鄧紫棋 GEM
16. 王菲 Faye
17. 鄭秀文 Sammi
18. 楊千嬅 Miriam
19. 容祖兒 Joey
20. 陳慧琳 Kelly"""
