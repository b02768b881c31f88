from timed_interview.main import main

main()
