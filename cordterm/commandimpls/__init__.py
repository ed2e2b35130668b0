"""Built-in user commands: version, fixlayout, status, server, friends, file-send and manual."""